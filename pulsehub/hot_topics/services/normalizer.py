from __future__ import annotations

import logging
import math
import time
from typing import Any, List, Mapping, Optional

from pulsehub.hot_topics.models.topic import PlatformResult, Topic
from pulsehub.hot_topics.utils.text import fill_template, first_present

logger = logging.getLogger(__name__)

TITLE_FIELDS = ("title", "name", "word")
POPULARITY_FIELDS = ("hot", "hot_value")
GENERIC_SEARCH_TEMPLATE = "https://www.baidu.com/s?wd={query}"

SYNTHETIC_POPULARITY_BASE = 100000
SYNTHETIC_POPULARITY_CEILING = 50


def synthesize_popularity(upstream: Any, rank_index: int) -> int:
    """Upstream popularity when it is a positive finite number, else a rank-based score.

    Infinite or NaN floats count as missing. The fallback is
    ``100000 * max(1, 50 - rank_index)``: earlier items score higher and
    everything from position 49 on shares the floor.
    """
    if isinstance(upstream, float) and not math.isfinite(upstream):
        upstream = None
    if isinstance(upstream, (int, float)) and not isinstance(upstream, bool) and upstream > 0:
        return int(upstream)
    return SYNTHETIC_POPULARITY_BASE * max(1, SYNTHETIC_POPULARITY_CEILING - rank_index)


def normalize_topics(
    platform_id: str,
    payload: Any,
    search_templates: Optional[Mapping[str, str]] = None,
) -> List[Topic]:
    templates = search_templates or {}
    template = templates.get(platform_id, GENERIC_SEARCH_TEMPLATE)

    items = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        logger.info("Payload for %s carries no topic list", platform_id)
        return []

    topics: List[Topic] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            item = {}
        title = str(first_present(item, TITLE_FIELDS) or "")
        url = item.get("url")
        if not isinstance(url, str) or not url:
            url = fill_template(template, title)
        topics.append(
            Topic(
                title=title,
                url=url,
                popularity=synthesize_popularity(first_present(item, POPULARITY_FIELDS), index),
                rank=index + 1,
            )
        )
    return topics


def normalize(
    platform_id: str,
    payload: Any,
    search_templates: Optional[Mapping[str, str]] = None,
    fetched_at_epoch_millis: Optional[int] = None,
    display_name: str = "",
) -> PlatformResult:
    topics = normalize_topics(platform_id, payload, search_templates)
    if fetched_at_epoch_millis is None:
        fetched_at_epoch_millis = int(time.time() * 1000)
    return PlatformResult(
        platform_id=platform_id,
        topics=tuple(topics),
        fetched_at_epoch_millis=fetched_at_epoch_millis,
        display_name=display_name or platform_id,
    )
