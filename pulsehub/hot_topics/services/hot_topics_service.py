from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from pulsehub.hot_topics.config import load_config
from pulsehub.hot_topics.connectors import BaseConnector, FetchPolicy, load_connectors
from pulsehub.hot_topics.connectors.base import DEFAULT_BASE_URL
from pulsehub.hot_topics.models.errors import FetchError, FetchErrorKind
from pulsehub.hot_topics.models.topic import AggregateResponse, PlatformOutcome, PlatformResult
from pulsehub.hot_topics.services.aggregation_service import AggregationService
from pulsehub.hot_topics.services.result_assembler import assemble
from pulsehub.hot_topics.services.retry import with_retry

logger = logging.getLogger(__name__)


class HotTopicsService:
    """Fetches every configured platform and ranks what they have in common.

    Holds configuration only; each call runs an independent cycle. An
    ``httpx.AsyncClient`` may be injected, otherwise one is opened per call.
    """

    def __init__(
        self,
        config_path: str | None = None,
        config: Optional[Dict[str, Any]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config if config is not None else load_config(config_path)

        upstream = self.config.get("upstream", {})
        base_url = upstream.get("base_url", DEFAULT_BASE_URL)
        self.headers = {"User-Agent": upstream.get("user_agent", "PulseHub/2.0.0")}
        self.connectors: List[BaseConnector] = load_connectors(self.config.get("platforms"), base_url)
        self._by_name = {connector.name: connector for connector in self.connectors}

        fetch_all_cfg = self.config.get("fetch_all", {})
        self.platform_policy = FetchPolicy(
            timeout_ms=fetch_all_cfg.get("timeout_ms", 20000),
            retries=fetch_all_cfg.get("retries", 1),
            base_delay_ms=fetch_all_cfg.get("base_delay_ms", 500),
        )
        self.cycle_retries = fetch_all_cfg.get("cycle_retries", 1)
        self.cycle_base_delay_ms = fetch_all_cfg.get("cycle_base_delay_ms", 500)

        fetch_one_cfg = self.config.get("fetch_one", {})
        self.single_policy = FetchPolicy(
            timeout_ms=fetch_one_cfg.get("timeout_ms", 9000),
            retries=fetch_one_cfg.get("retries", 1),
            base_delay_ms=fetch_one_cfg.get("base_delay_ms", 500),
        )

        aggregation_cfg = self.config.get("aggregation", {})
        self.aggregation = AggregationService(
            min_platforms=aggregation_cfg.get("min_platforms", 2),
            min_key_length=aggregation_cfg.get("min_title_length", 3),
            limit=aggregation_cfg.get("limit", 10),
        )
        self._client = client

    @property
    def platform_ids(self) -> List[str]:
        return [connector.name for connector in self.connectors]

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        # fetch_json enforces the per-request deadline
        async with httpx.AsyncClient(timeout=None) as client:
            yield client

    async def fetch_one(self, platform_id: str) -> PlatformResult:
        connector = self._by_name.get(platform_id)
        if connector is None:
            raise FetchError.unknown(f"Platform {platform_id} is not supported by the API")
        async with self._session() as client:
            return await connector.fetch(client, self.single_policy, self.headers)

    async def fetch_all(self, platform_ids: Optional[List[str]] = None) -> AggregateResponse:
        """Fetch ``platform_ids`` (default: every enabled platform) in one cycle.

        Raises:
            FetchError: ``retry-exhausted`` when no platform succeeded in any cycle.
        """
        requested = list(dict.fromkeys(platform_ids)) if platform_ids is not None else self.platform_ids
        async with self._session() as client:
            return await with_retry(
                lambda: self._fetch_all_once(client, requested),
                self.cycle_retries,
                self.cycle_base_delay_ms,
                label="fetch_all",
            )

    async def _fetch_all_once(self, client: httpx.AsyncClient, platform_ids: List[str]) -> AggregateResponse:
        outcomes: Dict[str, PlatformOutcome] = {}
        connectors: List[BaseConnector] = []
        for platform_id in platform_ids:
            connector = self._by_name.get(platform_id)
            if connector is None:
                outcomes[platform_id] = FetchError.unknown(f"Platform {platform_id} is not supported by the API")
            else:
                connectors.append(connector)

        tasks = [connector.fetch(client, self.platform_policy, self.headers) for connector in connectors]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        for connector, result in zip(connectors, results, strict=False):
            if isinstance(result, PlatformResult):
                outcomes[connector.name] = result
            elif isinstance(result, FetchError):
                logger.warning("Connector %s returned error: %s", connector.name, result.message)
                outcomes[connector.name] = result
            elif isinstance(result, Exception):
                logger.warning("Connector %s raised unexpectedly: %s", connector.name, result)
                outcomes[connector.name] = FetchError.unknown(f"Failed to fetch data from {connector.name}")
            else:
                raise result

        successes = [outcome for outcome in outcomes.values() if isinstance(outcome, PlatformResult)]
        if not successes:
            logger.error("All %d platform requests failed", len(platform_ids))
            raise FetchError(
                FetchErrorKind.RETRY_EXHAUSTED,
                "All platform requests failed after retries",
                retryable=True,
            )

        aggregated = self.aggregation.aggregate(successes)
        logger.info(
            "Fetch cycle finished: %d/%d platforms ok, aggregated=%s",
            len(successes), len(platform_ids), aggregated is not None,
        )
        return assemble(platform_ids, outcomes, aggregated)


def run_sync(config_path: str | None = None) -> AggregateResponse:
    service = HotTopicsService(config_path)
    return asyncio.run(service.fetch_all())
