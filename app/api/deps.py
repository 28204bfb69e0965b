from fastapi import Request

from app.schemas.profile import Profile
from app.services.interaction_service import InteractionResolver
from app.services.match_store import MatchStore
from app.services.profile_service import PROFILES


def get_match_store(request: Request) -> MatchStore:
    return request.app.state.match_store


def get_interaction_resolver(request: Request) -> InteractionResolver:
    return request.app.state.interaction_resolver


def get_profile_catalogue() -> list[Profile]:
    return PROFILES
