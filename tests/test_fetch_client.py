"""
Tests for the single-request fetch client.
"""

import asyncio

import httpx
import pytest

from pulsehub.hot_topics.models.errors import FetchError, FetchErrorKind
from pulsehub.hot_topics.services.fetch_client import fetch_json

URL = "https://upstream.test/v2/weibo"


def _run(handler, timeout_ms=1000):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await fetch_json(client, URL, timeout_ms)

    return asyncio.run(go())


class TestFetchJson:
    """Tests for fetch_json."""

    def test_returns_decoded_body(self):
        body = _run(lambda request: httpx.Response(200, json={"data": [{"title": "a"}]}))
        assert body == {"data": [{"title": "a"}]}

    def test_sends_json_accept_and_user_agent(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, json={})

        _run(handler)
        assert seen["accept"] == "application/json"
        assert seen["user-agent"] == "PulseHub/2.0.0"
        assert seen["cache-control"] == "no-cache"

    def test_client_error_status(self):
        with pytest.raises(FetchError) as exc_info:
            _run(lambda request: httpx.Response(404))
        assert exc_info.value.kind is FetchErrorKind.HTTP
        assert exc_info.value.status == 404
        assert exc_info.value.retryable is False

    def test_server_error_status_is_retryable(self):
        with pytest.raises(FetchError) as exc_info:
            _run(lambda request: httpx.Response(502))
        assert exc_info.value.kind is FetchErrorKind.HTTP
        assert exc_info.value.retryable is True

    def test_transport_failure_is_network(self):
        def handler(request):
            raise httpx.ConnectError("connection reset", request=request)

        with pytest.raises(FetchError) as exc_info:
            _run(handler)
        assert exc_info.value.kind is FetchErrorKind.NETWORK
        assert exc_info.value.retryable is True

    def test_redirect_loop_is_network(self):
        def handler(request):
            raise httpx.TooManyRedirects("redirect loop", request=request)

        with pytest.raises(FetchError) as exc_info:
            _run(handler)
        assert exc_info.value.kind is FetchErrorKind.NETWORK
        assert exc_info.value.retryable is True

    def test_content_decoding_failure_is_network(self):
        def handler(request):
            raise httpx.DecodingError("bad gzip stream", request=request)

        with pytest.raises(FetchError) as exc_info:
            _run(handler)
        assert exc_info.value.kind is FetchErrorKind.NETWORK

    def test_deadline_aborts_slow_request(self):
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, json={})

        with pytest.raises(FetchError) as exc_info:
            _run(handler, timeout_ms=50)
        assert exc_info.value.kind is FetchErrorKind.TIMEOUT
        assert exc_info.value.retryable is True

    def test_httpx_timeout_is_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(FetchError) as exc_info:
            _run(handler)
        assert exc_info.value.kind is FetchErrorKind.TIMEOUT

    def test_invalid_json_is_unknown(self):
        with pytest.raises(FetchError) as exc_info:
            _run(lambda request: httpx.Response(200, text="<html>not json</html>"))
        assert exc_info.value.kind is FetchErrorKind.UNKNOWN
        assert exc_info.value.retryable is False
