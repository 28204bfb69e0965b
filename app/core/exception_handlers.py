"""
FastAPI exception handlers.

Every error response carries an X-Request-ID header that also appears in the
log line, so a client report can be traced back to the server log.
"""

import logging
import uuid
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException, ErrorCode

logger = logging.getLogger(__name__)

HTTP_STATUS_CODES = {
    404: ErrorCode.RESOURCE_NOT_FOUND,
    405: ErrorCode.VALIDATION_ERROR,
    409: ErrorCode.RESOURCE_ALREADY_EXISTS,
    422: ErrorCode.VALIDATION_ERROR,
    502: ErrorCode.NETWORK_ERROR,
    503: ErrorCode.SERVER_UNAVAILABLE,
    504: ErrorCode.OPERATION_TIMEOUT,
}


def generate_request_id() -> str:
    return uuid.uuid4().hex[:8]


def _error_response(status_code: int, content: dict[str, Any], request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=content,
        headers={"X-Request-ID": request_id},
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render store, validation and interaction failures through ``to_dict``."""
    request_id = generate_request_id()
    logger.warning(
        "%s %s failed: %s (code=%s, request_id=%s)",
        request.method,
        request.url.path,
        exc.message,
        exc.code.value,
        request_id,
    )
    return _error_response(exc.status_code, exc.to_dict(), request_id)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request models that fail pydantic validation, e.g. a message body without text."""
    request_id = generate_request_id()
    errors = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    logger.warning(
        "%s %s rejected: %d invalid field(s) (request_id=%s)",
        request.method,
        request.url.path,
        len(errors),
        request_id,
    )
    return _error_response(
        422,
        {"detail": errors, "code": ErrorCode.VALIDATION_ERROR.value},
        request_id,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Routing errors such as unknown paths and wrong methods."""
    request_id = generate_request_id()
    code = HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.SERVER_ERROR)
    logger.warning(
        "%s %s returned %d (request_id=%s)",
        request.method,
        request.url.path,
        exc.status_code,
        request_id,
    )
    return _error_response(
        exc.status_code,
        {"detail": exc.detail or "An error occurred", "code": code.value},
        request_id,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = generate_request_id()
    logger.exception(
        "Unhandled error on %s %s (request_id=%s)",
        request.method,
        request.url.path,
        request_id,
    )
    return _error_response(
        500,
        {
            "detail": "Something went wrong. Please try again later.",
            "code": ErrorCode.SERVER_ERROR.value,
        },
        request_id,
    )
