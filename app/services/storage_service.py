"""Local key-value storage used to persist the matches envelope."""

import logging
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import StorageError
from app.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Process-local store, used in tests and when the database is unreachable."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SqlKeyValueStore:
    """Key-value store backed by the storage_entries table."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def get(self, key: str) -> str | None:
        try:
            async with self._session_maker() as db:
                result = await db.execute(
                    select(StorageEntry.value).where(StorageEntry.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read storage key {key}: {e}")
            raise StorageError(f"Failed to read from storage: {key}", key=key) from e

    async def set(self, key: str, value: str) -> None:
        try:
            async with self._session_maker() as db:
                entry = await db.get(StorageEntry, key)
                if entry is None:
                    db.add(StorageEntry(key=key, value=value))
                else:
                    entry.value = value
                await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write storage key {key}: {e}")
            raise StorageError(f"Failed to write to storage: {key}", key=key) from e

    async def remove(self, key: str) -> None:
        try:
            async with self._session_maker() as db:
                await db.execute(delete(StorageEntry).where(StorageEntry.key == key))
                await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to remove storage key {key}: {e}")
            raise StorageError(f"Failed to remove from storage: {key}", key=key) from e
