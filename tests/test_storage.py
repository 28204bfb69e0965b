"""Tests for the SQLAlchemy-backed key-value store."""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.exceptions import StorageError
from app.database import Base
from app.models.storage_entry import StorageEntry  # noqa: F401
from app.services.match_store import MatchStore
from app.services.storage_service import MemoryKeyValueStore, SqlKeyValueStore


@pytest_asyncio.fixture
async def session_maker(tmp_path: Path) -> AsyncGenerator[async_sessionmaker, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def broken_session_maker(tmp_path: Path) -> AsyncGenerator[async_sessionmaker, None]:
    """Session maker over a database without the storage_entries table."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.mark.asyncio
async def test_get_missing_key(session_maker):
    storage = SqlKeyValueStore(session_maker)
    assert await storage.get("tinder-matches") is None


@pytest.mark.asyncio
async def test_set_get_overwrite_remove(session_maker):
    storage = SqlKeyValueStore(session_maker)

    await storage.set("tinder-matches", '{"version":1,"data":[]}')
    assert await storage.get("tinder-matches") == '{"version":1,"data":[]}'

    await storage.set("tinder-matches", "second")
    assert await storage.get("tinder-matches") == "second"

    await storage.remove("tinder-matches")
    assert await storage.get("tinder-matches") is None


@pytest.mark.asyncio
async def test_remove_missing_key(session_maker):
    storage = SqlKeyValueStore(session_maker)
    await storage.remove("nothing-here")


@pytest.mark.asyncio
async def test_failures_raise_storage_error(broken_session_maker):
    storage = SqlKeyValueStore(broken_session_maker)

    with pytest.raises(StorageError) as exc_info:
        await storage.get("tinder-matches")
    assert exc_info.value.metadata == {"key": "tinder-matches"}

    with pytest.raises(StorageError):
        await storage.set("tinder-matches", "[]")

    with pytest.raises(StorageError):
        await storage.remove("tinder-matches")


@pytest.mark.asyncio
async def test_match_store_persists_through_database(session_maker):
    storage = SqlKeyValueStore(session_maker)
    store = MatchStore(storage, debounce_ms=10)
    await store.load()

    match = store.add_match({"id": 3, "name": "Emma", "age": 25, "image": "/girl-3.jpg"})
    store.add_message(match.id, "Namaste")
    await store.flush()

    reloaded = MatchStore(SqlKeyValueStore(session_maker), debounce_ms=10)
    await reloaded.load()

    assert reloaded.matches == store.matches
    assert reloaded.get_match(match.id).last_message.text == "Namaste"


@pytest.mark.asyncio
async def test_match_store_with_broken_database(broken_session_maker):
    store = MatchStore(SqlKeyValueStore(broken_session_maker), debounce_ms=10)
    await store.load()

    assert store.matches == []
    assert store.error == "Failed to load matches"


@pytest.mark.asyncio
async def test_memory_store():
    storage = MemoryKeyValueStore({"a": "1"})
    assert await storage.get("a") == "1"
    await storage.set("a", "2")
    assert await storage.get("a") == "2"
    await storage.remove("a")
    await storage.remove("a")
    assert await storage.get("a") is None
