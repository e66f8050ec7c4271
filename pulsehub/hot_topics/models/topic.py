from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple, Union

from pulsehub.hot_topics.models.errors import FetchError, describe_error

AGGREGATED_PLATFORM_ID = "aggregated"
AGGREGATED_DISPLAY_NAME = "Aggregated Hot Topics"


@dataclass(frozen=True, slots=True)
class Topic:
    """One trending item. ``rank`` is 1-based within its list."""

    title: str
    url: str
    popularity: int
    rank: int
    source_platforms: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "url": self.url,
            "hot": self.popularity,
            "rank": self.rank,
        }
        if self.source_platforms:
            data["platforms"] = list(self.source_platforms)
        return data


@dataclass(frozen=True, slots=True)
class PlatformResult:
    platform_id: str
    topics: Tuple[Topic, ...]
    fetched_at_epoch_millis: int
    display_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform": self.platform_id,
            "display_name": self.display_name or self.platform_id,
            "topics": [topic.to_dict() for topic in self.topics],
            "timestamp": self.fetched_at_epoch_millis,
        }


PlatformOutcome = Union[PlatformResult, FetchError]


@dataclass(frozen=True, slots=True)
class AggregateResponse:
    """Outcome of one aggregation cycle, keyed by platform id."""

    results: Mapping[str, PlatformOutcome] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    @property
    def data(self) -> Dict[str, PlatformResult]:
        return {key: value for key, value in self.results.items() if isinstance(value, PlatformResult)}

    @property
    def errors(self) -> Dict[str, FetchError]:
        return {key: value for key, value in self.results.items() if isinstance(value, FetchError)}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": {key: result.to_dict() for key, result in self.data.items()},
            "errors": {
                key: describe_error(value).to_dict() if isinstance(value, FetchError) else None
                for key, value in self.results.items()
            },
        }
