from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from pulsehub.hot_topics.models.topic import PlatformResult
from pulsehub.hot_topics.services.fetch_client import fetch_json
from pulsehub.hot_topics.services.normalizer import normalize
from pulsehub.hot_topics.services.retry import with_retry

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://60s.viki.moe"


@dataclass(frozen=True, slots=True)
class FetchPolicy:
    timeout_ms: int
    retries: int
    base_delay_ms: int


class BaseConnector:
    """One upstream platform: where its feed lives and how to search it."""

    name: str = "base"
    endpoint: str = ""
    search_template: str = ""
    display_name: str = ""

    def __init__(self, config: Optional[Dict[str, Any]] = None, base_url: str = DEFAULT_BASE_URL) -> None:
        self.config = config or {}
        self.enabled: bool = self.config.get("enabled", True)
        self.base_url = base_url.rstrip("/")
        self.endpoint = self.config.get("endpoint", self.endpoint)
        self.search_template = self.config.get("search_template", self.search_template)
        self.display_name = self.config.get("display_name", self.display_name or self.name)

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    async def fetch(
        self,
        client: httpx.AsyncClient,
        policy: FetchPolicy,
        headers: Optional[Dict[str, str]] = None,
    ) -> PlatformResult:
        async def attempt() -> PlatformResult:
            payload = await fetch_json(client, self.url, policy.timeout_ms, headers=headers)
            return normalize(
                self.name,
                payload,
                {self.name: self.search_template},
                display_name=self.display_name,
            )

        result = await with_retry(attempt, policy.retries, policy.base_delay_ms, label=self.name)
        logger.info("Connector %s produced %d topics", self.name, len(result.topics))
        return result
