from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from pulsehub.hot_topics.models.topic import (
    AGGREGATED_DISPLAY_NAME,
    AGGREGATED_PLATFORM_ID,
    PlatformResult,
    Topic,
)
from pulsehub.hot_topics.services.normalizer import GENERIC_SEARCH_TEMPLATE
from pulsehub.hot_topics.utils.text import fill_template, title_key, unique_append

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _CrossPlatformEntry:
    title: str
    popularity: int
    url: str
    platforms: List[str] = field(default_factory=list)


class AggregationService:
    """Ranks topics reported by several platforms at once.

    Titles are matched and shown in their trimmed, lower-cased form. The
    first non-empty URL seen in platform order wins.
    """

    def __init__(self, min_platforms: int = 2, min_key_length: int = 3, limit: int = 10) -> None:
        self.min_platforms = min_platforms
        self.min_key_length = min_key_length
        self.limit = limit

    def aggregate(self, results: Iterable[PlatformResult]) -> Optional[PlatformResult]:
        entries: Dict[str, _CrossPlatformEntry] = {}
        for result in results:
            for topic in result.topics:
                key = title_key(topic.title)
                if len(key) < self.min_key_length:
                    continue
                entry = entries.get(key)
                if entry is None:
                    entries[key] = _CrossPlatformEntry(
                        title=key,
                        popularity=topic.popularity or 0,
                        url=topic.url or "",
                        platforms=[result.platform_id],
                    )
                    continue
                unique_append(entry.platforms, result.platform_id)
                entry.popularity = max(entry.popularity, topic.popularity or 0)
                if not entry.url and topic.url:
                    entry.url = topic.url

        qualifying = [entry for entry in entries.values() if len(entry.platforms) >= self.min_platforms]
        # sorted() is stable, ties keep first-insertion order
        qualifying = sorted(qualifying, key=lambda e: (-len(e.platforms), -e.popularity))[: self.limit]

        if not qualifying:
            logger.info("No topic reached %d platforms out of %d candidates", self.min_platforms, len(entries))
            return None

        topics = tuple(
            Topic(
                title=entry.title,
                url=entry.url or fill_template(GENERIC_SEARCH_TEMPLATE, entry.title),
                popularity=entry.popularity,
                rank=index + 1,
                source_platforms=tuple(entry.platforms),
            )
            for index, entry in enumerate(qualifying)
        )
        logger.info("Aggregated %d cross-platform topics from %d candidates", len(topics), len(entries))
        return PlatformResult(
            platform_id=AGGREGATED_PLATFORM_ID,
            topics=topics,
            fetched_at_epoch_millis=int(time.time() * 1000),
            display_name=AGGREGATED_DISPLAY_NAME,
        )
