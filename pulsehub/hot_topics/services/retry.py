from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from pulsehub.hot_topics.models.errors import FetchError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int,
    base_delay_ms: int,
    label: str = "operation",
) -> T:
    """Run ``operation`` up to ``max_retries + 1`` times with exponential backoff.

    After failed attempt ``n`` (0-based) the coroutine sleeps
    ``base_delay_ms * 2 ** n`` before trying again. Only retryable
    ``FetchError``s are re-attempted; any other error is raised at once. When
    the budget runs out a terminal ``retry-exhausted`` error is raised,
    chained to the last failure.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except FetchError as err:
            if not err.retryable:
                raise
            if attempt >= max_retries:
                logger.warning("%s failed after %d attempts: %s", label, attempt + 1, err.message)
                raise FetchError.retry_exhausted(
                    f"{label} failed after {attempt + 1} attempts: {err.message}"
                ) from err
            delay_ms = base_delay_ms * 2 ** attempt
            logger.warning(
                "%s attempt %d/%d failed (%s), retrying in %dms",
                label, attempt + 1, max_retries + 1, err.kind.value, delay_ms,
            )
        except Exception as err:  # pylint: disable=broad-except
            raise FetchError.unknown(f"{label} failed: {err}") from err

        await asyncio.sleep(delay_ms / 1000)
        attempt += 1
