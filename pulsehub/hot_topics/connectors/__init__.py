from __future__ import annotations

from typing import Dict, List, Optional

from pulsehub.hot_topics.connectors.base import DEFAULT_BASE_URL, BaseConnector, FetchPolicy
from pulsehub.hot_topics.connectors.platforms import (
    BaiduConnector,
    BilibiliConnector,
    DouyinConnector,
    ToutiaoConnector,
    WeiboConnector,
    ZhihuConnector,
)

CONNECTOR_REGISTRY = {
    "weibo": WeiboConnector,
    "douyin": DouyinConnector,
    "bilibili": BilibiliConnector,
    "zhihu": ZhihuConnector,
    "baidu": BaiduConnector,
    "toutiao": ToutiaoConnector,
}


def load_connectors(
    connector_config: Optional[Dict[str, Optional[Dict]]] = None,
    base_url: str = DEFAULT_BASE_URL,
) -> List[BaseConnector]:
    """Build enabled connectors in config order; all six when no config is given."""
    if connector_config is None:
        connector_config = {name: {} for name in CONNECTOR_REGISTRY}
    connectors: List[BaseConnector] = []
    for name, params in connector_config.items():
        connector_cls = CONNECTOR_REGISTRY.get(name)
        if not connector_cls:
            continue
        connector = connector_cls(params or {}, base_url=base_url)
        if connector.enabled:
            connectors.append(connector)
    return connectors


__all__ = [
    "BaseConnector",
    "CONNECTOR_REGISTRY",
    "FetchPolicy",
    "load_connectors",
]
