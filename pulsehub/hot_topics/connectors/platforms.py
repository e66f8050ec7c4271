from __future__ import annotations

from pulsehub.hot_topics.connectors.base import BaseConnector


class WeiboConnector(BaseConnector):
    name = "weibo"
    endpoint = "/v2/weibo"
    search_template = "https://s.weibo.com/weibo?q={query}&typeall=1&suball=1"
    display_name = "Weibo Hot Search"


class DouyinConnector(BaseConnector):
    name = "douyin"
    endpoint = "/v2/douyin"
    search_template = "https://www.douyin.com/search/{query}?type=general"
    display_name = "Douyin Hot List"


class BilibiliConnector(BaseConnector):
    name = "bilibili"
    endpoint = "/v2/bili"
    search_template = "https://search.bilibili.com/all?keyword={query}&order=pubdate"
    display_name = "Bilibili Hot List"


class ZhihuConnector(BaseConnector):
    name = "zhihu"
    endpoint = "/v2/zhihu"
    search_template = "https://www.zhihu.com/search?q={query}&type=content"
    display_name = "Zhihu Hot List"


class BaiduConnector(BaseConnector):
    name = "baidu"
    endpoint = "/v2/baidu/hot"
    search_template = "https://www.baidu.com/s?wd={query}&tn=baidu&ie=utf-8"
    display_name = "Baidu Hot Search"


class ToutiaoConnector(BaseConnector):
    name = "toutiao"
    endpoint = "/v2/toutiao"
    search_template = "https://www.toutiao.com/search/?keyword={query}&autocomplete=true"
    display_name = "Toutiao Hot List"
