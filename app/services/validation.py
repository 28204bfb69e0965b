"""Shape and range checks for profiles, stored matches and store inputs."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.core.exceptions import RequiredFieldError, ValidationError
from app.schemas.match import Match
from app.schemas.profile import Profile

PROFILE_FIELD_MESSAGES = {
    "id": "Profile must have a valid ID",
    "name": "Profile must have a valid name",
    "age": "Profile must have a valid age (18-100)",
    "image": "Profile must have a valid image URL",
}


def validate_profile(profile: Any) -> Profile:
    """
    Validate a profile-shaped object and return a fresh Profile copy.
    Raises ValidationError naming the first offending field.
    """
    if isinstance(profile, Profile):
        profile = profile.model_dump()
    if not isinstance(profile, dict):
        raise ValidationError("Profile must be an object")

    try:
        return Profile.model_validate(profile)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else None
        message = PROFILE_FIELD_MESSAGES.get(field, f"Profile has an invalid {field}")
        if error["type"] == "missing":
            raise RequiredFieldError(message, field=field) from e
        raise ValidationError(message, field=field) from e


def is_valid_profile(profile: Any) -> bool:
    try:
        validate_profile(profile)
    except ValidationError:
        return False
    return True


def parse_match(record: Any) -> Match | None:
    """Return the record as a Match, or None if it is not a valid stored match."""
    if not isinstance(record, dict):
        return None
    if not is_valid_profile(record.get("profile")):
        return None
    try:
        return Match.model_validate(record)
    except PydanticValidationError:
        return None


def is_valid_match(record: Any) -> bool:
    return parse_match(record) is not None


def validate_match_id(match_id: Any) -> str:
    if not isinstance(match_id, str) or not match_id:
        raise ValidationError("Invalid match ID", field="match_id")
    return match_id


def validate_message_text(text: Any) -> str:
    """Return the trimmed message text."""
    if not isinstance(text, str) or not text.strip():
        raise RequiredFieldError("Message text is required", field="text")
    if len(text) > settings.MAX_MESSAGE_LENGTH:
        raise ValidationError(
            f"Message too long (max {settings.MAX_MESSAGE_LENGTH} characters)",
            field="text",
        )
    return text.strip()
