# 声明：本代码仅供学习和研究目的使用。使用者应遵守以下原则：
# 1. 不得用于任何商业用途。
# 2. 使用时应遵守目标平台的使用条款和robots.txt规则。
# 3. 不得进行大规模爬取或对平台造成运营干扰。
# 4. 应合理控制请求频率，避免给目标平台带来不必要的负担。
# 5. 不得用于任何非法或不当的用途。
#
# 详细许可条款请参阅项目根目录下的LICENSE文件。
# 使用本代码即表示您同意遵守上述原则和LICENSE中的所有条款。


# -*- coding: utf-8 -*-
import asyncio
import random
from typing import Dict, Iterable, Iterator, List, Optional, Tuple
from urllib.parse import parse_qs, parse_qsl, urldefrag, urlencode, urljoin, urlsplit, urlunsplit

import config
from base.base_crawler import AbstractRateLimiter
from model.m_news import NewsSource
from tools import utils

from .field import IMAGE_ORIGIN_PARAM, IMAGE_RESIZE_PARAMS, NAVER_URLS


class OrderedUrlSet:
    """按插入顺序去重的URL集合，以完整字符串作为键"""

    def __init__(self, urls: Optional[Iterable[str]] = None):
        self._items: Dict[str, None] = {}
        for url in urls or ():
            self.add(url)

    def add(self, url: str) -> bool:
        """加入URL，返回是否为新URL"""
        if url in self._items:
            return False
        self._items[url] = None
        return True

    def to_list(self) -> List[str]:
        return list(self._items)

    def __contains__(self, url: object) -> bool:
        return url in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


def canonicalize_article_link(raw_href: str, base_url: Optional[str], source: NewsSource) -> str:
    """
    把列表页上的文章链接转换为规范URL（去重用的键）

    Args:
        raw_href: 页面上的 href，可能是相对路径
        base_url: 列表页的最终URL，用于补全相对路径
        source: 新闻来源

    Returns:
        规范化后的绝对URL
    """
    href = raw_href.strip()
    url = urljoin(base_url, href) if base_url else href
    url, _ = urldefrag(url)
    if source == NewsSource.NAVER:
        return to_naver_mobile_url(url)
    return url


def to_naver_mobile_url(url: str) -> str:
    """
    read.naver?oid=xxx&aid=yyy 形式的旧链接 -> 移动版 /mnews/article/xxx/yyy
    已经是移动版的链接原样返回
    """
    parts = urlsplit(url)
    host = parts.hostname or ""
    path = parts.path or ""

    if "/mnews/article/" in path:
        if host.startswith("n."):
            return url
        return urlunsplit(("https", _mobile_host(host), path, "", ""))

    if "read.naver" in path:
        query = parse_qs(parts.query)
        oid = query.get("oid", [""])[0]
        aid = query.get("aid", [""])[0]
        if oid and aid:
            return NAVER_URLS['mobile_article'].format(host=_mobile_host(host), oid=oid, aid=aid)

    return url


def _mobile_host(host: str) -> str:
    """news.naver.com / m.news.naver.com -> n.news.naver.com"""
    if host.startswith(("m.", "n.")):
        host = host[2:]
    return f"n.{host}"


def restore_original_image_url(raw_img_url: str) -> str:
    """
    缩略图URL还原为原图URL

    - 带 fname=<编码后的原图URL> 参数的缩略图，直接返回解码后的原图地址
    - 其他URL去掉 type / w / t 等缩放参数，scheme/host/path 保持不变
    """
    parts = urlsplit(raw_img_url)
    query = parse_qsl(parts.query, keep_blank_values=True)

    for key, value in query:
        if key == IMAGE_ORIGIN_PARAM and value:
            return value

    kept = [(key, value) for key, value in query if key.lower() not in IMAGE_RESIZE_PARAMS]
    if len(kept) == len(query):
        return raw_img_url
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(kept), parts.fragment))


class RandomDelayLimiter(AbstractRateLimiter):
    """随机礼貌延迟，避免触发站点限流"""

    def __init__(self, delay_range: Optional[Tuple[float, float]] = None):
        self.min_delay, self.max_delay = delay_range or config.NEWS_POLITE_DELAY_RANGE

    async def wait(self) -> None:
        delay = random.uniform(self.min_delay, self.max_delay)
        if delay <= 0:
            return
        utils.logger.debug(f"[RandomDelayLimiter] 礼貌延迟 {delay:.2f} 秒")
        await asyncio.sleep(delay)
