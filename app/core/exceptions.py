"""
Custom exception classes for the Swipe Match application.
Provides structured error handling with machine-readable error codes.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes shared with the frontend"""

    # Resource errors (404, 409)
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_ALREADY_EXISTS = "RESOURCE_ALREADY_EXISTS"

    # Validation errors (422)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    VALIDATION_INVALID_FORMAT = "VALIDATION_INVALID_FORMAT"
    VALIDATION_REQUIRED_FIELD = "VALIDATION_REQUIRED_FIELD"

    # Interaction errors
    INTERACTION_INVALID_JSON = "INTERACTION_INVALID_JSON"
    INTERACTION_INVALID_BODY = "INTERACTION_INVALID_BODY"
    INTERACTION_DUPLICATE_LIKE = "INTERACTION_DUPLICATE_LIKE"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"

    # Upstream / client errors
    NETWORK_ERROR = "NETWORK_ERROR"
    OPERATION_TIMEOUT = "OPERATION_TIMEOUT"

    # Server errors (500+)
    SERVER_ERROR = "SERVER_ERROR"
    SERVER_UNAVAILABLE = "SERVER_UNAVAILABLE"


class AppException(Exception):
    """
    Base exception class for application errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SERVER_ERROR,
        status_code: int = 500,
        field: str | None = None,
        metadata: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.field = field
        self.metadata = metadata or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary"""
        response = {
            "detail": self.message,
            "code": self.code.value,
        }
        if self.field:
            response["field"] = self.field
        if self.metadata:
            response["metadata"] = self.metadata
        return response


# Resource Errors (404, 409)


class NotFoundError(AppException):
    """Resource not found"""

    def __init__(
        self,
        message: str = "Match not found",
        resource: str | None = None,
    ):
        metadata = {"resource": resource} if resource else None
        super().__init__(
            message=message,
            code=ErrorCode.RESOURCE_NOT_FOUND,
            status_code=404,
            metadata=metadata,
        )


class AlreadyExistsError(AppException):
    """Resource already exists"""

    def __init__(
        self,
        message: str = "Match already exists with this profile",
        field: str | None = None,
    ):
        super().__init__(
            message=message,
            code=ErrorCode.RESOURCE_ALREADY_EXISTS,
            status_code=409,
            field=field,
        )


# Validation Errors (422)


class ValidationError(AppException):
    """Validation error"""

    def __init__(
        self,
        message: str = "Invalid data",
        field: str | None = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=422,
            field=field,
        )


class InvalidFormatError(ValidationError):
    """Invalid data format"""

    def __init__(
        self,
        message: str = "Invalid matches data format",
        field: str | None = None,
    ):
        super().__init__(
            message=message,
            field=field,
            code=ErrorCode.VALIDATION_INVALID_FORMAT,
        )


class RequiredFieldError(ValidationError):
    """Required field missing"""

    def __init__(
        self,
        message: str = "This field is required",
        field: str | None = None,
    ):
        super().__init__(
            message=message,
            field=field,
            code=ErrorCode.VALIDATION_REQUIRED_FIELD,
        )


# Interaction Errors (409, 422)


class InteractionError(AppException):
    """
    Base class for interaction endpoint failures.
    These render as a bare ``{"error": message}`` body.
    """

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class InvalidPayloadError(InteractionError):
    """Request body is not valid JSON"""

    def __init__(self, message: str = "Invalid JSON"):
        super().__init__(
            message=message,
            code=ErrorCode.INTERACTION_INVALID_JSON,
            status_code=422,
        )


class InvalidBodyError(InteractionError):
    """Request body has missing or mistyped fields"""

    def __init__(self, message: str = "Invalid request body"):
        super().__init__(
            message=message,
            code=ErrorCode.INTERACTION_INVALID_BODY,
            status_code=422,
        )


class DuplicateLikeError(InteractionError):
    """The same directed like was already recorded"""

    def __init__(self, message: str = "Duplicate like"):
        super().__init__(
            message=message,
            code=ErrorCode.INTERACTION_DUPLICATE_LIKE,
            status_code=409,
        )


# Storage Errors (500)


class StorageError(AppException):
    """Key-value storage read/write failure"""

    def __init__(
        self,
        message: str = "Storage operation failed",
        key: str | None = None,
    ):
        metadata = {"key": key} if key else None
        super().__init__(
            message=message,
            code=ErrorCode.STORAGE_ERROR,
            status_code=500,
            metadata=metadata,
        )


# Upstream Errors (502, 504)


class NetworkError(AppException):
    """Upstream HTTP call failed"""

    def __init__(
        self,
        message: str = "Request failed",
        status_code: int | None = None,
    ):
        self.upstream_status = status_code
        metadata = {"upstream_status": status_code} if status_code else None
        super().__init__(
            message=message,
            code=ErrorCode.NETWORK_ERROR,
            status_code=502,
            metadata=metadata,
        )


class OperationTimeoutError(AppException):
    """Operation exceeded its allotted duration"""

    def __init__(self, message: str = "Operation timed out"):
        super().__init__(
            message=message,
            code=ErrorCode.OPERATION_TIMEOUT,
            status_code=504,
        )


# Server Errors (500)


class ServerError(AppException):
    """Internal server error"""

    def __init__(
        self,
        message: str = "Internal server error",
        code: ErrorCode = ErrorCode.SERVER_ERROR,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=500,
        )
