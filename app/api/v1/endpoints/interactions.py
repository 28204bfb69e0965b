from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from app.api.deps import get_interaction_resolver
from app.schemas.interaction import InteractionResponse
from app.services.interaction_service import InteractionResolver

router = APIRouter(prefix="", tags=["interactions"])


@router.post(
    "",
    response_model=InteractionResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
@router.post("/", response_model=InteractionResponse, status_code=status.HTTP_201_CREATED)
async def create_interaction(
    request: Request,
    resolver: Annotated[InteractionResolver, Depends(get_interaction_resolver)],
) -> InteractionResponse:
    """
    Like or dislike a profile.

    Responses:
    - 201 {"match": bool} - true when the other user already liked back
    - 409 {"error": "Duplicate like"} - same like sent twice
    - 422 {"error": "Invalid JSON" | "Invalid request body"}
    """
    body = await request.body()
    return await resolver.resolve(body)
