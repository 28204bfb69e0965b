"""
Like/dislike resolution with reciprocity detection.

Directed like edges live in a LikeEdgeStore for the lifetime of the process.
A like forms a match when the reverse edge was already recorded.
"""

import asyncio
import json
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.core.exceptions import DuplicateLikeError, InvalidBodyError, InvalidPayloadError
from app.schemas.interaction import InteractionRequest, InteractionResponse

logger = logging.getLogger(__name__)


def edge_key(from_user_id: str | int, to_user_id: str | int) -> str:
    return f"{from_user_id}->{to_user_id}"


class LikeEdgeStore:
    """Set of directed like edges, keyed as "<from>-><to>"."""

    def __init__(self) -> None:
        self._edges: set[str] = set()

    def add(self, from_user_id: str | int, to_user_id: str | int) -> bool:
        """Record the edge. Returns False if it was already present."""
        key = edge_key(from_user_id, to_user_id)
        if key in self._edges:
            return False
        self._edges.add(key)
        return True

    def has(self, from_user_id: str | int, to_user_id: str | int) -> bool:
        return edge_key(from_user_id, to_user_id) in self._edges

    def __len__(self) -> int:
        return len(self._edges)


class InteractionResolver:
    def __init__(self, edges: LikeEdgeStore, delay_ms: int | None = None):
        self.edges = edges
        if delay_ms is None:
            delay_ms = settings.INTERACTION_DELAY_MS
        self._delay = delay_ms / 1000

    async def resolve(self, body: bytes | str) -> InteractionResponse:
        """
        Process a raw request body.

        Order matters: the simulated delay applies to every request, then
        the body is parsed, validated and resolved.
        """
        await asyncio.sleep(self._delay)

        payload = parse_payload(body)
        request = validate_request(payload)

        if request.action == "dislike":
            return InteractionResponse(match=False)

        # No await between check and insert: each edge is recorded exactly once.
        if not self.edges.add(request.from_user_id, request.to_user_id):
            logger.info(
                f"Duplicate like {edge_key(request.from_user_id, request.to_user_id)}"
            )
            raise DuplicateLikeError()

        is_match = self.edges.has(request.to_user_id, request.from_user_id)
        if is_match:
            logger.info(
                f"Mutual match between {request.from_user_id} and {request.to_user_id}"
            )
        return InteractionResponse(match=is_match)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_payload(body: bytes | str) -> Any:
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except (TypeError, ValueError) as e:
        raise InvalidPayloadError() from e


def validate_request(payload: Any) -> InteractionRequest:
    if not isinstance(payload, dict):
        raise InvalidBodyError()
    try:
        return InteractionRequest.model_validate(payload)
    except PydanticValidationError as e:
        raise InvalidBodyError() from e
