# 声明：本代码仅供学习和研究目的使用。使用者应遵守以下原则：
# 1. 不得用于任何商业用途。
# 2. 使用时应遵守目标平台的使用条款和robots.txt规则。
# 3. 不得进行大规模爬取或对平台造成运营干扰。
# 4. 应合理控制请求频率，避免给目标平台带来不必要的负担。
# 5. 不得用于任何非法或不当的用途。
#
# 详细许可条款请参阅项目根目录下的LICENSE文件。
# 使用本代码即表示您同意遵守上述原则和LICENSE中的所有条款。

"""
爬取流程测试：数量限制、跨页去重、失败跳过、取消
"""

import asyncio
from typing import Dict, List, Optional, Set

import pytest

from base.base_crawler import AbstractStore
from media_platform.news.adapter import NaverAdapter
from media_platform.news.core import NewsCrawler
from media_platform.news.exception import DataFetchError
from media_platform.news.help import RandomDelayLimiter
from model.m_news import CrawlRequest, HtmlDocument, NewsArticle

DAUM_PAGE_1 = "https://news.daum.net/economy"
DAUM_PAGE_2 = "https://news.daum.net/economy?page=2"
DAUM_PAGE_3 = "https://news.daum.net/economy?page=3"


def daum_article_url(n: int) -> str:
    return f"https://news.daum.net/v/{n}"


def listing_html(article_numbers: List[int], next_href: Optional[str] = None) -> str:
    links = "".join(f'<li><a href="/v/{n}">기사 {n}</a></li>' for n in article_numbers)
    paging = f'<div class="paging"><a class="next" href="{next_href}">다음</a></div>' if next_href else ""
    return f"<html><body><ul>{links}</ul>{paging}</body></html>"


def article_html(title: str, body: str) -> str:
    paragraph = f"<p>{body}</p>" if body else ""
    return (
        f'<html><head><meta property="og:title" content="{title}"></head>'
        f'<body><div id="harmonyContainer"><section>{paragraph}</section></div></body></html>'
    )


class FakeNewsClient:
    """按URL返回预设页面或异常"""

    def __init__(self, pages: Dict[str, object], on_fetch=None):
        self.pages = pages
        self.on_fetch = on_fetch
        self.fetched: List[str] = []

    async def fetch(self, url: str, timeout: Optional[float] = None) -> HtmlDocument:
        self.fetched.append(url)
        if self.on_fetch:
            self.on_fetch(url)
        page = self.pages.get(url)
        if page is None:
            raise DataFetchError(url, "HTTP 404")
        if isinstance(page, Exception):
            raise page
        return HtmlDocument(url=url, html=page)


class FakeStore(AbstractStore):
    def __init__(self, fail_urls: Optional[Set[str]] = None, on_store=None):
        self.fail_urls = fail_urls or set()
        self.on_store = on_store
        self.articles: List[NewsArticle] = []

    async def store_content(self, content_item: NewsArticle) -> str:
        if content_item.source_url in self.fail_urls:
            raise IOError("disk full")
        self.articles.append(content_item)
        if self.on_store:
            self.on_store(content_item)
        return f"id-{content_item.source_url.rsplit('/', 1)[-1]}"


def run_crawl(pages: Dict[str, object], quota: int, source: str = "daum",
              store: Optional[FakeStore] = None, on_fetch=None):
    store = store or FakeStore()
    client = FakeNewsClient(pages, on_fetch=on_fetch)

    async def _crawl():
        crawler = NewsCrawler(store=store, news_client=client, rate_limiter=RandomDelayLimiter((0, 0)))
        return await crawler.crawl(CrawlRequest(source=source, category="economy", quota=quota))

    return asyncio.run(_crawl()), client, store


def two_page_site(**overrides) -> Dict[str, object]:
    pages: Dict[str, object] = {
        DAUM_PAGE_1: listing_html([1, 2, 3], next_href="?page=2"),
        DAUM_PAGE_2: listing_html([3, 4]),
    }
    for n in range(1, 5):
        pages[daum_article_url(n)] = article_html(f"제목 {n}", f"본문 {n}")
    pages.update(overrides)
    return pages


def test_crawl_stops_at_quota():
    """达到数量后不再抓取剩余文章"""
    saved_ids, client, store = run_crawl(two_page_site(), quota=2)

    assert saved_ids == ["id-1", "id-2"]
    assert client.fetched == [DAUM_PAGE_1, daum_article_url(1), daum_article_url(2)]
    assert [a.title for a in store.articles] == ["제목 1", "제목 2"]


def test_crawl_dedups_links_across_pages():
    """跨页重复的链接只处理一次"""
    saved_ids, client, store = run_crawl(two_page_site(), quota=10)

    assert saved_ids == ["id-1", "id-2", "id-3", "id-4"]
    assert client.fetched.count(daum_article_url(3)) == 1
    assert client.fetched == [
        DAUM_PAGE_1, daum_article_url(1), daum_article_url(2), daum_article_url(3),
        DAUM_PAGE_2, daum_article_url(4),
    ]


def test_article_without_body_is_not_stored():
    pages = two_page_site(**{daum_article_url(2): article_html("제목 2", "")})
    saved_ids, _, store = run_crawl(pages, quota=10)

    assert saved_ids == ["id-1", "id-3", "id-4"]
    assert all(a.content.strip() for a in store.articles)


def test_article_fetch_failure_is_skipped():
    pages = two_page_site(**{daum_article_url(1): DataFetchError(daum_article_url(1), "timeout")})
    saved_ids, _, _ = run_crawl(pages, quota=2)

    assert saved_ids == ["id-2", "id-3"]


def test_persist_failure_is_skipped():
    store = FakeStore(fail_urls={daum_article_url(2)})
    saved_ids, _, _ = run_crawl(two_page_site(), quota=10, store=store)

    assert saved_ids == ["id-1", "id-3", "id-4"]


def test_page_without_new_links_ends_crawl():
    """某页全部是已见过的链接时结束，不再翻页"""
    pages = two_page_site(**{DAUM_PAGE_2: listing_html([1, 2], next_href="?page=3")})
    pages[DAUM_PAGE_3] = listing_html([5])
    saved_ids, client, _ = run_crawl(pages, quota=10)

    assert saved_ids == ["id-1", "id-2", "id-3"]
    assert DAUM_PAGE_3 not in client.fetched


def test_malformed_listing_link_is_dropped():
    """列表页上无法解析的链接被丢弃，其余文章照常保存"""
    listing = (
        '<html><body><a href="/v/1">기사 1</a><a href="http://[x/v/2">기사 2</a>'
        '<a href="/v/3">기사 3</a></body></html>'
    )
    saved_ids, client, _ = run_crawl(two_page_site(**{DAUM_PAGE_1: listing}), quota=5)

    assert saved_ids == ["id-1", "id-3"]
    assert client.fetched == [DAUM_PAGE_1, daum_article_url(1), daum_article_url(3)]


def test_article_with_malformed_image_is_still_saved():
    """图片地址无效时只跳过该图片，文章照常保存"""
    html = (
        '<html><head><meta property="og:title" content="제목 1"></head><body>'
        '<div id="harmonyContainer"><section><p>본문 1</p><img src="http://[x/a.jpg"></section></div>'
        '</body></html>'
    )
    saved_ids, _, store = run_crawl(two_page_site(**{daum_article_url(1): html}), quota=1)

    assert saved_ids == ["id-1"]
    assert store.articles[0].content == "본문 1"
    assert store.articles[0].images == []


def test_listing_failure_propagates():
    pages = two_page_site(**{DAUM_PAGE_1: DataFetchError(DAUM_PAGE_1, "HTTP 500")})
    with pytest.raises(DataFetchError):
        run_crawl(pages, quota=2)


def test_cancel_returns_saved_articles():
    """取消后返回已经保存的文章ID"""
    holder = {}

    def cancel_after_first(article: NewsArticle):
        holder["crawler"].cancel()

    store = FakeStore(on_store=cancel_after_first)
    client = FakeNewsClient(two_page_site())

    async def _crawl():
        crawler = NewsCrawler(store=store, news_client=client, rate_limiter=RandomDelayLimiter((0, 0)))
        holder["crawler"] = crawler
        return await crawler.crawl(CrawlRequest(source="daum", quota=10))

    saved_ids = asyncio.run(_crawl())

    assert saved_ids == ["id-1"]
    assert daum_article_url(2) not in client.fetched


def test_naver_crawl_ends_when_page_repeats():
    """Naver 超过最后一页时返回相同内容，视为没有新链接"""
    adapter = NaverAdapter()
    first = adapter.start_cursor("economy")
    second = adapter._make_cursor(first.code, first.date, 2)
    listing = """
        <a href="https://news.naver.com/main/read.naver?oid=001&aid=0000000001">A</a>
        <a href="https://news.naver.com/main/read.naver?oid=001&aid=0000000002">B</a>
    """
    naver_article = (
        '<html><body><h2 class="media_end_head_headline">{title}</h2>'
        '<div id="dic_area">{title} 본문</div></body></html>'
    )
    pages = {
        first.url: listing,
        second.url: listing,
        "https://n.news.naver.com/mnews/article/001/0000000001": naver_article.format(title="A"),
        "https://n.news.naver.com/mnews/article/001/0000000002": naver_article.format(title="B"),
    }
    saved_ids, client, store = run_crawl(pages, quota=10, source="naver")

    assert saved_ids == ["id-0000000001", "id-0000000002"]
    assert client.fetched[-1] == second.url
    assert store.articles[0].content == "A 본문"


def test_clamp_quota():
    assert NewsCrawler.clamp_quota(0) == 1
    assert NewsCrawler.clamp_quota(7) == 7
    assert NewsCrawler.clamp_quota(500) == 50
