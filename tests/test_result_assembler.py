"""
Tests for merging per-platform outcomes into one response.
"""

import pytest

from pulsehub.hot_topics.models.errors import FetchError, FetchErrorKind
from pulsehub.hot_topics.models.topic import PlatformResult, Topic
from pulsehub.hot_topics.services.result_assembler import assemble

PLATFORMS = ["weibo", "douyin", "bilibili"]


def _ok(platform_id):
    topic = Topic(title="t", url="https://x.test", popularity=1, rank=1)
    return PlatformResult(platform_id=platform_id, topics=(topic,), fetched_at_epoch_millis=1)


class TestAssemble:
    """Tests for assemble."""

    def test_every_platform_and_aggregated_present_once(self):
        aggregated = PlatformResult(platform_id="aggregated", topics=(), fetched_at_epoch_millis=1)
        outcomes = {"weibo": _ok("weibo"), "douyin": FetchError.timeout(), "bilibili": _ok("bilibili")}
        response = assemble(PLATFORMS, outcomes, aggregated)
        assert list(response.results) == PLATFORMS + ["aggregated"]
        assert response.results["aggregated"] is aggregated
        assert isinstance(response.results["douyin"], FetchError)

    def test_missing_outcome_becomes_error(self):
        response = assemble(PLATFORMS, {"weibo": _ok("weibo")}, None)
        assert response.results["douyin"].kind is FetchErrorKind.UNKNOWN
        assert response.results["bilibili"].kind is FetchErrorKind.UNKNOWN

    def test_absent_aggregate_is_reported_unavailable(self):
        response = assemble(PLATFORMS, {name: _ok(name) for name in PLATFORMS}, None)
        error = response.results["aggregated"]
        assert isinstance(error, FetchError)
        assert error.message == "Aggregated data unavailable"

    def test_response_is_read_only(self):
        response = assemble(PLATFORMS, {}, None)
        with pytest.raises(TypeError):
            response.results["weibo"] = _ok("weibo")

    def test_data_and_errors_views(self):
        outcomes = {"weibo": _ok("weibo"), "douyin": FetchError.http(404)}
        response = assemble(["weibo", "douyin"], outcomes, None)
        assert set(response.data) == {"weibo"}
        assert set(response.errors) == {"douyin", "aggregated"}

    def test_to_dict_shape(self):
        outcomes = {"weibo": _ok("weibo"), "douyin": FetchError.network("reset")}
        payload = assemble(["weibo", "douyin"], outcomes, None).to_dict()
        assert payload["data"]["weibo"] == {
            "platform": "weibo",
            "display_name": "weibo",
            "topics": [{"title": "t", "url": "https://x.test", "hot": 1, "rank": 1}],
            "timestamp": 1,
        }
        assert payload["errors"]["weibo"] is None
        assert payload["errors"]["douyin"]["type"] == "network"
        assert payload["errors"]["aggregated"]["type"] == "unknown"
