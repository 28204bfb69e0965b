"""Async HTTP client for the profile listing and interaction endpoints."""

import logging

import httpx

from app.config import settings
from app.core.exceptions import NetworkError
from app.schemas.interaction import InteractionRequest, InteractionResponse
from app.schemas.profile import ProfilesResponse

logger = logging.getLogger(__name__)


class SwipeApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "SwipeApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def get_profiles(self) -> ProfilesResponse:
        response = await self._client.get(
            "/profiles/", headers={"Cache-Control": "no-store"}
        )
        if response.status_code == 204:
            return ProfilesResponse(data=[])
        if not response.is_success:
            logger.warning(f"Profiles fetch failed with status {response.status_code}")
            raise NetworkError("Profiles fetch failed", response.status_code)
        return ProfilesResponse.model_validate(response.json())

    async def post_interaction(self, request: InteractionRequest) -> InteractionResponse:
        response = await self._client.post(
            "/interactions/",
            json=request.model_dump(by_alias=True),
        )
        if not response.is_success:
            if response.status_code == 409:
                raise NetworkError("Duplicate like", 409)
            if response.status_code == 422:
                raise NetworkError("Invalid request", 422)
            raise NetworkError("Interaction failed", response.status_code)
        return InteractionResponse.model_validate(response.json())
