from app.schemas.interaction import InteractionRequest, InteractionResponse
from app.schemas.match import (
    LastMessage,
    Match,
    MatchListResponse,
    MessageCreate,
    StorageInfo,
    UnmatchResponse,
)
from app.schemas.profile import Profile, ProfilesResponse

__all__ = [
    "Profile",
    "ProfilesResponse",
    "LastMessage",
    "Match",
    "MatchListResponse",
    "MessageCreate",
    "UnmatchResponse",
    "StorageInfo",
    "InteractionRequest",
    "InteractionResponse",
]
