from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status

from app.api.deps import get_match_store
from app.core.exceptions import AppException, NotFoundError, ServerError
from app.schemas.match import (
    Match,
    MatchListResponse,
    MessageCreate,
    StorageInfo,
    UnmatchResponse,
)
from app.services.match_store import MatchStore

router = APIRouter(prefix="", tags=["matches"])


def _last_failure(store: MatchStore) -> AppException:
    """The classified error behind the store's most recent failed operation."""
    return store.last_exception or ServerError(store.error or "Match operation failed")


@router.get("/", response_model=MatchListResponse)
async def get_my_matches(
    store: Annotated[MatchStore, Depends(get_match_store)],
) -> MatchListResponse:
    """Get all active matches, most recent first."""
    matches = store.matches
    return MatchListResponse(
        matches=matches,
        total=len(matches),
        loading=store.loading,
        error=store.error,
    )


@router.post("/", response_model=Match, status_code=status.HTTP_201_CREATED)
async def add_match(
    profile: Annotated[dict[str, Any], Body()],
    store: Annotated[MatchStore, Depends(get_match_store)],
) -> Match:
    """
    Record a match with the given profile.

    Fails if the profile is invalid or an active match with it already exists.
    """
    match = store.add_match(profile)
    if match is None:
        raise _last_failure(store)
    return match


# NOTE: This route MUST be defined before /{match_id} to avoid route conflicts
@router.get("/storage", response_model=StorageInfo)
async def get_storage_info(
    store: Annotated[MatchStore, Depends(get_match_store)],
) -> StorageInfo:
    """Count of active matches and size of the persisted data."""
    return await store.get_storage_info()


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def clear_matches(
    store: Annotated[MatchStore, Depends(get_match_store)],
) -> None:
    """Delete all matches, including the persisted copy."""
    if not await store.clear_matches():
        raise _last_failure(store)


@router.get("/{match_id}", response_model=Match)
async def get_match(
    match_id: str,
    store: Annotated[MatchStore, Depends(get_match_store)],
) -> Match:
    """Get a match by ID, including unmatched ones."""
    match = store.get_match(match_id)
    if match is None:
        raise NotFoundError("Match not found", resource="match")
    return match


@router.post("/{match_id}/unmatch", response_model=UnmatchResponse)
async def unmatch(
    match_id: str,
    store: Annotated[MatchStore, Depends(get_match_store)],
) -> UnmatchResponse:
    """Unmatch. The record is kept but hidden from the active list."""
    if not store.unmatch(match_id):
        raise _last_failure(store)
    return UnmatchResponse(success=True)


@router.post("/{match_id}/messages", response_model=Match)
async def add_message(
    match_id: str,
    data: MessageCreate,
    store: Annotated[MatchStore, Depends(get_match_store)],
) -> Match:
    """Set the last message of an active match."""
    if not store.add_message(match_id, data.text, data.from_user):
        raise _last_failure(store)
    return store.get_match(match_id)
