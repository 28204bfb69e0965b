from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from app.schemas.profile import Profile


class LastMessage(BaseModel):
    """Most recent message exchanged in a match"""

    text: StrictStr
    timestamp: StrictInt | StrictFloat
    from_user: StrictBool

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Match(BaseModel):
    """
    A confirmed mutual like.

    Serialized with camelCase keys (matchedAt, lastMessage, isUnmatched),
    which is also the persisted format.
    """

    id: StrictStr = Field(..., min_length=1)
    profile: Profile
    matched_at: StrictInt | StrictFloat
    last_message: LastMessage | None = None
    is_unmatched: StrictBool

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("matched_at")
    @classmethod
    def matched_at_positive(cls, value: int | float) -> int | float:
        if not value > 0:
            raise ValueError("matchedAt must be a positive timestamp")
        return value

    @field_validator("last_message", mode="before")
    @classmethod
    def drop_malformed_message(cls, value):
        # Malformed previews are dropped, the match itself is kept
        if value is None or isinstance(value, LastMessage):
            return value
        try:
            return LastMessage.model_validate(value)
        except PydanticValidationError:
            return None


class MatchListResponse(BaseModel):
    """Active matches view of the store"""

    matches: list[Match]
    total: int
    loading: bool
    error: str | None


class MessageCreate(BaseModel):
    """Append a message to a match"""

    text: str
    from_user: bool = True

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UnmatchResponse(BaseModel):
    success: bool


class StorageInfo(BaseModel):
    """Persisted storage usage"""

    match_count: int
    storage_used: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
