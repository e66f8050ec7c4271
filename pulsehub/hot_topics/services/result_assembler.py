from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from pulsehub.hot_topics.models.errors import FetchError
from pulsehub.hot_topics.models.topic import (
    AGGREGATED_PLATFORM_ID,
    AggregateResponse,
    PlatformOutcome,
    PlatformResult,
)

logger = logging.getLogger(__name__)


def assemble(
    platform_ids: Iterable[str],
    outcomes: Mapping[str, PlatformOutcome],
    aggregated: Optional[PlatformResult],
) -> AggregateResponse:
    """Merge per-platform outcomes into one response.

    Every requested platform and ``"aggregated"`` get exactly one slot, holding
    either a ``PlatformResult`` or a ``FetchError``.
    """
    results = {}
    for platform_id in platform_ids:
        outcome = outcomes.get(platform_id)
        if outcome is None:
            logger.warning("No outcome recorded for %s", platform_id)
            outcome = FetchError.unknown(f"Failed to fetch data from {platform_id}")
        results[platform_id] = outcome

    results[AGGREGATED_PLATFORM_ID] = (
        aggregated if aggregated is not None else FetchError.unknown("Aggregated data unavailable")
    )
    return AggregateResponse(results=results)
