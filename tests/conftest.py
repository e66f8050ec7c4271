"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import httpx
import pytest

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

PLATFORM_PATHS = {
    "/v2/weibo": "weibo",
    "/v2/douyin": "douyin",
    "/v2/bili": "bilibili",
    "/v2/zhihu": "zhihu",
    "/v2/baidu/hot": "baidu",
    "/v2/toutiao": "toutiao",
}


def make_payload(*titles, hot=None):
    """Upstream-shaped body: {"data": [{"title": ..., "hot": ...}, ...]}."""
    items = []
    for title in titles:
        item = {"title": title}
        if hot is not None:
            item["hot"] = hot
        items.append(item)
    return {"code": 200, "data": items}


@pytest.fixture
def fast_config():
    """Service config with no backoff delays and short deadlines."""
    return {
        "upstream": {"base_url": "https://upstream.test", "user_agent": "PulseHub/test"},
        "fetch_all": {
            "timeout_ms": 1000,
            "retries": 1,
            "base_delay_ms": 0,
            "cycle_retries": 1,
            "cycle_base_delay_ms": 0,
        },
        "fetch_one": {"timeout_ms": 1000, "retries": 1, "base_delay_ms": 0},
    }


@pytest.fixture
def mock_client_factory():
    """Build an AsyncClient whose requests are answered by ``routes``.

    ``routes`` maps platform id to a JSON payload, an int status code, or an
    exception class raised as a transport failure. Unlisted platforms get 503.
    The returned ``calls`` list records every requested platform id.
    """

    def factory(routes):
        calls = []

        def handler(request):
            platform = PLATFORM_PATHS.get(request.url.path, request.url.path)
            calls.append(platform)
            answer = routes.get(platform, 503)
            if isinstance(answer, type) and issubclass(answer, Exception):
                raise answer("simulated failure", request=request)
            if isinstance(answer, int):
                return httpx.Response(answer, json={"message": "error"})
            return httpx.Response(200, json=answer)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler)), calls

    return factory


@pytest.fixture
def payload():
    return make_payload
