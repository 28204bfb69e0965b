"""Retry and timeout wrappers for async operations."""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from app.core.exceptions import OperationTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    delay: float = 1.0,
) -> T:
    """
    Await operation(), retrying on failure with exponential backoff.
    The last error is re-raised once all attempts are used.
    """
    for attempt in range(1, max_retries + 1):
        try:
            return await operation()
        except Exception as e:
            logger.warning(f"Attempt {attempt}/{max_retries} failed: {e}")
            if attempt == max_retries:
                raise
            await asyncio.sleep(delay * 2 ** (attempt - 1))

    raise ValueError("max_retries must be at least 1")


async def with_timeout(
    operation: Callable[[], Awaitable[T]],
    timeout: float = 10.0,
) -> T:
    try:
        return await asyncio.wait_for(operation(), timeout)
    except asyncio.TimeoutError as e:
        raise OperationTimeoutError(
            f"Operation timed out after {int(timeout * 1000)}ms"
        ) from e
