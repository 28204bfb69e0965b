"""
Versioned envelope for persisted matches.

Written form is always {"version": N, "data": [...]}; a bare JSON array
from older releases is still accepted on read.
"""

import json
from typing import Any, Sequence

from app.config import settings
from app.core.exceptions import InvalidFormatError
from app.schemas.match import Match

CURRENT_VERSION = settings.MATCH_STORAGE_VERSION


def encode(matches: Sequence[Match]) -> str:
    payload = {
        "version": CURRENT_VERSION,
        "data": [match.model_dump(mode="json", by_alias=True) for match in matches],
    }
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def decode(text: str) -> list[Any]:
    """
    Parse stored text into raw match records.
    Records are not validated here; callers filter them.
    """
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError) as e:
        raise InvalidFormatError("Invalid matches data format") from e

    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict) and "version" in parsed and "data" in parsed:
        data = parsed["data"]
        return data if isinstance(data, list) else []

    raise InvalidFormatError("Invalid matches data format")
