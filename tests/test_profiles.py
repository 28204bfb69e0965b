"""Tests for the profile listing endpoint."""

import pytest
from httpx import AsyncClient

from app.api.deps import get_profile_catalogue
from app.main import app
from app.services import profile_service


@pytest.mark.asyncio
async def test_list_profiles(client: AsyncClient):
    response = await client.get("/api/v1/profiles/")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [p["id"] for p in data] == [1, 2, 3, 4, 5]
    assert data[1]["name"] == "Jessica"
    assert data[1]["images"] == ["/girl-24.png", "/girl-22.png", "/girl-23.png", "/girl-25.png"]


@pytest.mark.asyncio
async def test_list_profiles_empty_returns_no_content(client: AsyncClient):
    app.dependency_overrides[get_profile_catalogue] = lambda: []

    response = await client.get("/api/v1/profiles/")

    assert response.status_code == 204
    assert response.content == b""


@pytest.mark.asyncio
async def test_catalogue_profiles_are_valid(store):
    """Every catalogue profile can be turned into a match."""
    for profile in profile_service.PROFILES:
        assert store.add_match(profile) is not None


@pytest.mark.asyncio
async def test_list_profiles_returns_copy():
    profiles = await profile_service.list_profiles(delay_ms=0)
    profiles.clear()
    assert len(profile_service.PROFILES) == 5


@pytest.mark.asyncio
async def test_list_profiles_without_trailing_slash(client: AsyncClient):
    response = await client.get("/api/v1/profiles")

    assert response.status_code == 200
    assert len(response.json()["data"]) == 5
