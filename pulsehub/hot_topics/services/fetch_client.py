from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import httpx

from pulsehub.hot_topics.models.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "PulseHub/2.0.0",
    "Accept": "application/json",
    "Cache-Control": "no-cache",
}


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    timeout_ms: int,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """GET ``url`` and decode its JSON body within a hard ``timeout_ms`` deadline.

    Raises:
        FetchError: ``http`` for status >= 400, ``timeout`` when the deadline
            passes, ``network`` for any other request failure, ``unknown``
            for a body that is not JSON.
    """
    request_headers = {**DEFAULT_HEADERS, **(headers or {})}
    try:
        response = await asyncio.wait_for(
            client.get(url, headers=request_headers),
            timeout=timeout_ms / 1000,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as err:
        logger.warning("Request to %s timed out after %dms", url, timeout_ms)
        raise FetchError.timeout() from err
    except httpx.RequestError as err:
        logger.warning("Request failure for %s: %s", url, err)
        raise FetchError.network(f"Failed to fetch data from {url}") from err

    if response.status_code >= 400:
        logger.warning("Upstream %s answered HTTP %d", url, response.status_code)
        raise FetchError.http(response.status_code)

    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        raise FetchError.unknown(f"Invalid JSON payload from {url}") from err
