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
from typing import List, Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

import config
from model.m_news import ExtractedNews, HtmlDocument, ListingCursor, ListingPage, NewsArticle, NewsSource
from tools import utils
from tools.time_util import get_compact_date

from .extractor import NewsArticleExtractor
from .field import (DAUM_CATEGORY_URLS, DAUM_SELECTORS, DEFAULT_CATEGORY, NAVER_CATEGORY_SID1,
                    NAVER_SELECTORS, NAVER_URLS, NEXT_PAGE_TEXT_RE)
from .help import canonicalize_article_link


def _collect_article_links(soup: BeautifulSoup, selector: str, page_url: str, source: NewsSource) -> List[str]:
    """列表页上的文章链接，无法解析的 href 直接丢弃"""
    links = []
    for anchor in soup.select(selector):
        try:
            links.append(canonicalize_article_link(anchor["href"], page_url, source))
        except ValueError as e:
            utils.logger.debug(f"[adapter._collect_article_links] 丢弃无效链接 {anchor['href']!r}: {e}")
    return links


def _build_article(extractor: NewsArticleExtractor,
                   extracted: ExtractedNews,
                   source: NewsSource,
                   url: str,
                   category: str) -> NewsArticle:
    return NewsArticle(
        title=extracted.title,
        content=extractor.compose_content(extracted),
        author=extracted.author,
        publish_time=extracted.publish_time,
        category=category,
        source=source,
        source_url=url,
        images=extracted.images,
    )


class DaumAdapter:
    """Daum：分类列表页 + “下一页”链接翻页"""

    source = NewsSource.DAUM
    selectors = DAUM_SELECTORS

    def __init__(self, extractor: Optional[NewsArticleExtractor] = None):
        self.extractor = extractor or NewsArticleExtractor()
        self.listing_timeout = config.DAUM_LISTING_TIMEOUT
        self.article_timeout = config.DAUM_ARTICLE_TIMEOUT

    def start_cursor(self, category: str) -> ListingCursor:
        url = DAUM_CATEGORY_URLS.get(category, DAUM_CATEGORY_URLS[DEFAULT_CATEGORY])
        return ListingCursor(url=url, page=1)

    def parse_listing(self, document: HtmlDocument, cursor: ListingCursor) -> ListingPage:
        soup = BeautifulSoup(document.html, "html.parser")
        links = _collect_article_links(soup, self.selectors['article_link'], document.url, self.source)

        next_cursor = None
        next_url = self.find_next_page_url(soup, document.url)
        if next_url:
            next_cursor = ListingCursor(url=next_url, page=cursor.page + 1)
        return ListingPage(links=links, next_cursor=next_cursor)

    def find_next_page_url(self, soup: BeautifulSoup, page_url: str) -> Optional[str]:
        """
        下一页链接，按优先级依次尝试：
        .paging a.next -> 分页区域内文本为 다음/더보기/Next/› 的链接 -> rel=next
        -> 带 page= 参数的链接 -> 整个页面中文本匹配的链接
        指向当前页自身或无法解析时视为没有下一页
        """
        candidates = (
            soup.select_one(self.selectors['next_page_class']),
            self._find_anchor_by_text(soup.select(self.selectors['pagination_container'])),
            soup.select_one(self.selectors['next_page_rel']),
            soup.select_one(self.selectors['next_page_query']),
            self._find_anchor_by_text([soup]),
        )
        anchor = next((a for a in candidates if a is not None and a.get("href")), None)
        if anchor is None:
            return None

        try:
            next_url = urljoin(page_url, anchor["href"].strip())
        except ValueError as e:
            utils.logger.debug(f"[DaumAdapter.find_next_page_url] 下一页链接无效 {anchor['href']!r}: {e}")
            return None
        if next_url.lower() == page_url.lower():
            return None
        return next_url

    @staticmethod
    def _find_anchor_by_text(scopes: List[Tag]) -> Optional[Tag]:
        """在给定范围内按链接自身文本（不含子元素）查找下一页链接"""
        for scope in scopes:
            for anchor in scope.find_all("a", href=True):
                own_text = "".join(anchor.find_all(string=True, recursive=False))
                if NEXT_PAGE_TEXT_RE.search(own_text):
                    return anchor
        return None

    def parse_article(self, document: HtmlDocument, url: str, category: str) -> Optional[NewsArticle]:
        extracted = self.extractor.extract(document, self.selectors)
        if extracted is None:
            return None
        return _build_article(self.extractor, extracted, self.source, url, category)


class NaverAdapter:
    """Naver：按 sid1 分类代码 + 当天日期 + 页码 拼接列表页，某页没有新链接即视为最后一页"""

    source = NewsSource.NAVER
    selectors = NAVER_SELECTORS

    def __init__(self, extractor: Optional[NewsArticleExtractor] = None, today: Optional[str] = None):
        self.extractor = extractor or NewsArticleExtractor()
        self.today = today
        self.listing_timeout = config.NAVER_LISTING_TIMEOUT
        self.article_timeout = config.NAVER_ARTICLE_TIMEOUT

    def start_cursor(self, category: str) -> ListingCursor:
        sid1 = NAVER_CATEGORY_SID1.get(category, NAVER_CATEGORY_SID1[DEFAULT_CATEGORY])
        date = self.today or get_compact_date(config.NEWS_TIMEZONE)
        return self._make_cursor(sid1, date, 1)

    @staticmethod
    def _make_cursor(sid1: str, date: str, page: int) -> ListingCursor:
        url = NAVER_URLS['list'].format(sid1=sid1, date=date, page=page)
        return ListingCursor(url=url, page=page, date=date, code=sid1)

    def parse_listing(self, document: HtmlDocument, cursor: ListingCursor) -> ListingPage:
        soup = BeautifulSoup(document.html, "html.parser")
        links = _collect_article_links(soup, self.selectors['article_link'], document.url, self.source)
        next_cursor = self._make_cursor(cursor.code, cursor.date, cursor.page + 1)
        return ListingPage(links=links, next_cursor=next_cursor)

    def parse_article(self, document: HtmlDocument, url: str, category: str) -> Optional[NewsArticle]:
        extracted = self.extractor.extract(document, self.selectors)
        if extracted is None:
            return None
        return _build_article(self.extractor, extracted, self.source, url, category)


SiteAdapter = Union[DaumAdapter, NaverAdapter]


class SiteAdapterFactory:
    ADAPTERS = {
        NewsSource.DAUM: DaumAdapter,
        NewsSource.NAVER: NaverAdapter,
    }

    @staticmethod
    def create_adapter(source: Union[NewsSource, str],
                       extractor: Optional[NewsArticleExtractor] = None) -> SiteAdapter:
        adapter_class = SiteAdapterFactory.ADAPTERS.get(NewsSource(source))
        if not adapter_class:
            raise ValueError("Invalid news source, currently only supported daum or naver ...")
        return adapter_class(extractor=extractor)
