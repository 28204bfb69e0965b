from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_interaction_resolver, get_match_store
from app.config import settings
from app.core.exceptions import StorageError
from app.main import app
from app.services.interaction_service import InteractionResolver, LikeEdgeStore
from app.services.match_store import MatchStore
from app.services.storage_service import MemoryKeyValueStore

TEST_DEBOUNCE_MS = 20


class RecordingKeyValueStore(MemoryKeyValueStore):
    """Memory store that records every write and can be switched to fail."""

    def __init__(self, initial: dict[str, str] | None = None):
        super().__init__(initial)
        self.writes: list[tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.fail_removes = False

    def seed(self, key: str, value: str) -> None:
        """Put a value in place without recording it as a write."""
        self._data[key] = value

    async def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError(f"Failed to read from storage: {key}", key=key)
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError(f"Failed to write to storage: {key}", key=key)
        self.writes.append((key, value))
        await super().set(key, value)

    async def remove(self, key: str) -> None:
        if self.fail_removes:
            raise StorageError(f"Failed to remove from storage: {key}", key=key)
        await super().remove(key)


@pytest.fixture
def storage() -> RecordingKeyValueStore:
    return RecordingKeyValueStore()


@pytest_asyncio.fixture
async def store(storage: RecordingKeyValueStore) -> AsyncGenerator[MatchStore, None]:
    match_store = MatchStore(storage, debounce_ms=TEST_DEBOUNCE_MS)
    await match_store.load()
    yield match_store
    await match_store.flush()


@pytest.fixture
def resolver() -> InteractionResolver:
    return InteractionResolver(LikeEdgeStore(), delay_ms=0)


@pytest_asyncio.fixture
async def client(
    store: MatchStore,
    resolver: InteractionResolver,
    monkeypatch: pytest.MonkeyPatch,
) -> AsyncGenerator[AsyncClient, None]:
    monkeypatch.setattr(settings, "PROFILES_DELAY_MS", 0)
    app.dependency_overrides[get_match_store] = lambda: store
    app.dependency_overrides[get_interaction_resolver] = lambda: resolver

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
