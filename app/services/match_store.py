"""
In-memory match store with debounced persistence.

All reads are synchronous against the current state. Every change to the
matches collection arms a single trailing-edge timer; when it fires, the
encoded collection is written to the key-value store unless it equals the
last successfully written text. Operation failures are logged and surfaced
through ``error`` instead of being raised.
"""

import asyncio
import logging
import time
import uuid
from typing import Any, Callable

from app.config import settings
from app.core.exceptions import (
    AlreadyExistsError,
    AppException,
    NotFoundError,
    StorageError,
    ValidationError,
)
from app.schemas.match import LastMessage, Match, StorageInfo
from app.services.match_codec import decode, encode
from app.services.match_reducer import (
    AddMatch,
    AddMessage,
    ClearMatches,
    MatchAction,
    MatchState,
    SetError,
    SetLoading,
    SetMatches,
    Unmatch,
    reduce,
)
from app.services.storage_service import KeyValueStore
from app.services.validation import (
    parse_match,
    validate_match_id,
    validate_message_text,
    validate_profile,
)

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def create_match_id(profile_id: int) -> str:
    return f"match_{profile_id}_{uuid.uuid4()}"


def format_size(size: int) -> str:
    """Format a byte count as B, KB or MB."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


class MatchStore:
    def __init__(
        self,
        storage: KeyValueStore,
        *,
        storage_key: str | None = None,
        max_matches: int | None = None,
        debounce_ms: int | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        self._storage = storage
        self._storage_key = storage_key or settings.MATCH_STORAGE_KEY
        self._max_matches = settings.MAX_MATCHES if max_matches is None else max_matches
        if debounce_ms is None:
            debounce_ms = settings.SAVE_DEBOUNCE_MS
        self._debounce = debounce_ms / 1000
        self._clock = clock

        self._state = MatchState()
        self._last_saved = ""
        self._save_handle: asyncio.TimerHandle | None = None
        self._pending_payload: str | None = None
        self._write_tasks: set[asyncio.Task] = set()
        self._write_lock = asyncio.Lock()

        self.last_exception: AppException | None = None

    # ---- state ----

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def matches(self) -> list[Match]:
        """Active (not unmatched) matches, most recent first."""
        return self._state.active_matches

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> str | None:
        return self._state.error

    def dispatch(self, action: MatchAction) -> None:
        previous = self._state
        self._state = reduce(previous, action)
        if (
            self._state.matches is not previous.matches
            or self._state.loading != previous.loading
        ):
            self._schedule_save()

    def _fail(self, exc: AppException, context: str, message: str | None = None) -> None:
        logger.error(f"{context}: {exc.message} (code={exc.code.value})")
        self.last_exception = exc
        self.dispatch(SetError(error=message or exc.message))

    def _find(self, match_id: str) -> Match | None:
        return next((m for m in self._state.matches if m.id == match_id), None)

    # ---- persistence ----

    async def load(self) -> None:
        """Read, decode and validate the stored matches. Corrupted data is discarded."""
        self.dispatch(SetLoading(loading=True))
        try:
            raw = await self._storage.get(self._storage_key)
            if not raw:
                # An absent entry already represents the empty collection
                self._last_saved = encode([])
                self.dispatch(SetMatches(matches=[]))
                return

            records = decode(raw)
            matches = [m for m in (parse_match(r) for r in records) if m is not None]
            if len(matches) < len(records):
                logger.warning(
                    f"Dropped {len(records) - len(matches)} invalid stored matches"
                )
            self._last_saved = raw
            self.dispatch(SetMatches(matches=matches[: self._max_matches]))
        except AppException as e:
            self._last_saved = encode([])
            self._fail(e, "Loading matches from storage", "Failed to load matches")
            self.dispatch(SetMatches(matches=[]))
            try:
                await self._storage.remove(self._storage_key)
            except StorageError as remove_error:
                logger.error(f"Could not clear corrupted matches: {remove_error.message}")

    def _schedule_save(self) -> None:
        self._cancel_pending_save()
        if self._state.loading:
            return

        payload = encode(self._state.matches[: self._max_matches])
        if payload == self._last_saved:
            return

        loop = asyncio.get_running_loop()
        self._pending_payload = payload
        self._save_handle = loop.call_later(self._debounce, self._start_write, payload)

    def _cancel_pending_save(self) -> None:
        if self._save_handle is not None:
            self._save_handle.cancel()
        self._save_handle = None
        self._pending_payload = None

    def _start_write(self, payload: str) -> None:
        self._save_handle = None
        self._pending_payload = None
        task = asyncio.create_task(self._write(payload))
        self._write_tasks.add(task)
        task.add_done_callback(self._write_tasks.discard)

    async def _write(self, payload: str) -> None:
        async with self._write_lock:
            try:
                await self._storage.set(self._storage_key, payload)
            except StorageError as e:
                self._fail(e, "Saving matches to storage", "Failed to save matches")
                return
            self._last_saved = payload

    async def flush(self) -> None:
        """Write any pending change now and wait for in-flight writes."""
        if self._save_handle is not None:
            payload = self._pending_payload
            self._cancel_pending_save()
            self._start_write(payload)
        if self._write_tasks:
            await asyncio.gather(*self._write_tasks)

    # ---- operations ----

    def add_match(self, profile: Any) -> Match | None:
        try:
            validated = validate_profile(profile)
            existing = next(
                (
                    m
                    for m in self._state.matches
                    if m.profile.id == validated.id and not m.is_unmatched
                ),
                None,
            )
            if existing is not None:
                raise AlreadyExistsError(
                    "Match already exists with this profile", field="profile.id"
                )

            match = Match(
                id=create_match_id(validated.id),
                profile=validated,
                matched_at=self._clock(),
                is_unmatched=False,
            )
        except AppException as e:
            self._fail(e, "Adding new match")
            return None

        self.dispatch(AddMatch(match=match))
        return match

    def get_match(self, match_id: Any) -> Match | None:
        try:
            validate_match_id(match_id)
        except ValidationError:
            logger.error(f"Invalid match ID: {match_id!r}")
            return None
        return self._find(match_id)

    def unmatch(self, match_id: Any) -> bool:
        try:
            validate_match_id(match_id)
            if self._find(match_id) is None:
                raise NotFoundError("Match not found", resource="match")
        except AppException as e:
            self._fail(e, "Unmatching user")
            return False

        self.dispatch(Unmatch(match_id=match_id))
        return True

    def add_message(self, match_id: Any, text: Any, from_user: bool = True) -> bool:
        try:
            validate_match_id(match_id)
            trimmed = validate_message_text(text)
            match = self._find(match_id)
            if match is None:
                raise NotFoundError("Match not found", resource="match")
            if match.is_unmatched:
                raise ValidationError("Cannot send message to unmatched user")
        except AppException as e:
            self._fail(e, "Adding message to match")
            return False

        message = LastMessage(text=trimmed, timestamp=self._clock(), from_user=bool(from_user))
        self.dispatch(AddMessage(match_id=match_id, message=message))
        return True

    async def clear_matches(self) -> bool:
        """Remove the stored entry, then empty the collection."""
        try:
            await self._storage.remove(self._storage_key)
        except StorageError as e:
            self._fail(e, "Clearing all matches")
            return False

        self._last_saved = ""
        self.dispatch(ClearMatches())
        return True

    async def get_storage_info(self) -> StorageInfo:
        try:
            stored = await self._storage.get(self._storage_key)
        except StorageError as e:
            logger.error(f"Getting storage info: {e.message}")
            return StorageInfo(match_count=0, storage_used="Unknown")

        size = len(stored.encode("utf-8")) if stored else 0
        return StorageInfo(match_count=len(self.matches), storage_used=format_size(size))
