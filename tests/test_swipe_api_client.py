"""Tests for the async HTTP client."""

import json

import httpx
import pytest
from httpx import ASGITransport

from app.api.deps import get_interaction_resolver, get_match_store
from app.clients.swipe_api import SwipeApiClient
from app.config import settings
from app.core.exceptions import NetworkError
from app.main import app
from app.schemas.interaction import InteractionRequest
from app.services import profile_service
from app.services.interaction_service import InteractionResolver, LikeEdgeStore
from app.services.match_store import MatchStore
from app.services.storage_service import MemoryKeyValueStore

PROFILE = {"id": 1, "name": "Sarah", "age": 21, "image": "/girl-1.jpg"}


def make_client(handler) -> SwipeApiClient:
    return SwipeApiClient(
        base_url="http://api.test/api/v1",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_get_profiles():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [PROFILE]})

    async with make_client(handler) as client:
        response = await client.get_profiles()

    assert [p.name for p in response.data] == ["Sarah"]
    assert seen[0].url.path == "/api/v1/profiles/"
    assert seen[0].headers["cache-control"] == "no-store"


@pytest.mark.asyncio
async def test_get_profiles_no_content():
    async with make_client(lambda request: httpx.Response(204)) as client:
        response = await client.get_profiles()

    assert response.data == []


@pytest.mark.asyncio
async def test_get_profiles_failure():
    async with make_client(lambda request: httpx.Response(500)) as client:
        with pytest.raises(NetworkError) as exc_info:
            await client.get_profiles()

    assert exc_info.value.message == "Profiles fetch failed"
    assert exc_info.value.upstream_status == 500


@pytest.mark.asyncio
async def test_post_interaction_sends_camel_case():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"match": True})

    async with make_client(handler) as client:
        response = await client.post_interaction(
            InteractionRequest(from_user_id="me", to_user_id=2, action="like")
        )

    assert response.match is True
    assert bodies == [{"fromUserId": "me", "toUserId": 2, "action": "like"}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,message",
    [
        (409, "Duplicate like"),
        (422, "Invalid request"),
        (500, "Interaction failed"),
    ],
)
async def test_post_interaction_failures(status_code, message):
    async with make_client(lambda request: httpx.Response(status_code)) as client:
        with pytest.raises(NetworkError) as exc_info:
            await client.post_interaction(
                InteractionRequest(from_user_id="me", to_user_id=2, action="like")
            )

    assert exc_info.value.message == message
    assert exc_info.value.upstream_status == status_code


@pytest.mark.asyncio
async def test_client_against_app(monkeypatch):
    """Swipe through the real app: list profiles, then like one twice."""
    monkeypatch.setattr(settings, "PROFILES_DELAY_MS", 0)
    resolver = InteractionResolver(LikeEdgeStore(), delay_ms=0)
    app.dependency_overrides[get_interaction_resolver] = lambda: resolver
    app.dependency_overrides[get_match_store] = lambda: MatchStore(MemoryKeyValueStore())

    try:
        async with SwipeApiClient(
            base_url="http://test/api/v1",
            transport=ASGITransport(app=app),
        ) as client:
            profiles = await client.get_profiles()
            assert len(profiles.data) == len(profile_service.PROFILES)

            request = InteractionRequest(
                from_user_id="me", to_user_id=profiles.data[0].id, action="like"
            )
            first = await client.post_interaction(request)
            assert first.match is False

            with pytest.raises(NetworkError) as exc_info:
                await client.post_interaction(request)
            assert exc_info.value.upstream_status == 409
    finally:
        app.dependency_overrides.clear()
