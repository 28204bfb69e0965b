from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_profile_catalogue
from app.schemas.profile import Profile, ProfilesResponse
from app.services import profile_service

router = APIRouter(prefix="", tags=["profiles"])


@router.get("", response_model=ProfilesResponse, include_in_schema=False)
@router.get(
    "/",
    response_model=ProfilesResponse,
    responses={status.HTTP_204_NO_CONTENT: {"description": "No more profiles"}},
)
async def list_profiles(
    catalogue: Annotated[list[Profile], Depends(get_profile_catalogue)],
) -> ProfilesResponse | Response:
    """Candidate profiles for the swipe stack. 204 when there are none left."""
    profiles = await profile_service.list_profiles(catalogue)
    if not profiles:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return ProfilesResponse(data=profiles)
