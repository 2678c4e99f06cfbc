# 声明：本代码仅供学习和研究目的使用。使用者应遵守以下原则：
# 1. 不得用于任何商业用途。
# 2. 使用时应遵守目标平台的使用条款和robots.txt规则。
# 3. 不得进行大规模爬取或对平台造成运营干扰。
# 4. 应合理控制请求频率，避免给目标平台带来不必要的负担。
# 5. 不得用于任何非法或不当的用途。
#
# 详细许可条款请参阅项目根目录下的LICENSE文件。
# 使用本代码即表示您同意遵守上述原则和LICENSE中的所有条款。


import asyncio
from dataclasses import dataclass, field
from typing import List, Optional

import config
from base.base_crawler import AbstractCrawler, AbstractRateLimiter, AbstractStore
from model.m_news import CrawlRequest, HtmlDocument, ListingCursor, NewsArticle
from store.news import NewsStoreFactory
from tools import utils

from .adapter import SiteAdapter, SiteAdapterFactory
from .client import NewsClient
from .exception import ArticlePersistError, ContentExtractionError, CrawlCancelledError, DataFetchError
from .field import CrawlState
from .help import OrderedUrlSet, RandomDelayLimiter


@dataclass
class CrawlSession:
    """一次爬取请求的运行状态，只在 crawl() 内部使用"""
    request: CrawlRequest
    cursor: Optional[ListingCursor] = None
    seen_urls: OrderedUrlSet = field(default_factory=OrderedUrlSet)
    saved_ids: List[str] = field(default_factory=list)
    state: CrawlState = CrawlState.INIT

    @property
    def saved_count(self) -> int:
        return len(self.saved_ids)

    @property
    def quota_reached(self) -> bool:
        return self.saved_count >= self.request.quota

    @property
    def done(self) -> bool:
        return self.state == CrawlState.DONE


class NewsCrawler(AbstractCrawler):
    """新闻分类爬虫：翻页抓取列表页，逐篇提取正文并保存，直到达到数量要求或没有更多文章"""

    def __init__(self,
                 store: Optional[AbstractStore] = None,
                 news_client: Optional[NewsClient] = None,
                 rate_limiter: Optional[AbstractRateLimiter] = None,
                 cancel_event: Optional[asyncio.Event] = None):
        self.cancel_event = cancel_event or asyncio.Event()
        self.store = store or NewsStoreFactory.create_store()
        self.news_client = news_client or NewsClient(cancel_event=self.cancel_event)
        self.rate_limiter = rate_limiter or RandomDelayLimiter()

    async def start(self):
        """按配置文件中的来源/分类/数量执行一次爬取"""
        utils.logger.info("[NewsCrawler] 开始启动新闻爬虫")
        request = CrawlRequest(
            source=config.NEWS_SOURCE,
            category=config.NEWS_CATEGORY or "economy",
            quota=self.clamp_quota(config.NEWS_QUOTA),
        )

        timer = None
        if config.NEWS_CRAWL_TIMEOUT > 0:
            timer = asyncio.get_running_loop().call_later(config.NEWS_CRAWL_TIMEOUT, self.cancel)

        try:
            saved_ids = await self.crawl(request)
            utils.logger.info(f"[NewsCrawler] 共保存 {len(saved_ids)} 篇文章: {saved_ids}")
        except Exception as e:
            utils.logger.error(f"[NewsCrawler] 爬取失败: {e}")
            raise e
        finally:
            if timer is not None:
                timer.cancel()
            utils.logger.info("[NewsCrawler] 新闻爬虫已结束")

    @staticmethod
    def clamp_quota(quota: int) -> int:
        """数量限制在 1 ~ NEWS_MAX_QUOTA"""
        return max(1, min(int(quota), config.NEWS_MAX_QUOTA))

    def cancel(self) -> None:
        """请求停止，当前等待点结束后返回已保存的文章"""
        utils.logger.info("[NewsCrawler] 收到取消请求")
        self.cancel_event.set()

    async def crawl(self, request: CrawlRequest) -> List[str]:
        """
        执行一次分类爬取

        Args:
            request: 来源/分类/数量

        Returns:
            已保存文章的ID，按保存顺序；被取消时返回取消前已保存的部分

        Raises:
            DataFetchError: 列表页抓取失败
        """
        adapter = SiteAdapterFactory.create_adapter(request.source)
        session = CrawlSession(request=request, cursor=adapter.start_cursor(request.category))
        utils.logger.info(
            f"[NewsCrawler] 开始爬取 source={request.source.value}, "
            f"category={request.category}, quota={request.quota}"
        )

        try:
            await self._run_session(session, adapter)
        except CrawlCancelledError as e:
            utils.logger.info(f"[NewsCrawler] 爬取已取消({e})，已保存 {session.saved_count} 篇")
        finally:
            session.state = CrawlState.DONE

        return list(session.saved_ids)

    async def _run_session(self, session: CrawlSession, adapter: SiteAdapter) -> None:
        while not session.quota_reached and session.cursor is not None:
            self._raise_if_cancelled()
            cursor = session.cursor

            session.state = CrawlState.FETCHING_LISTING
            utils.logger.info(f"[NewsCrawler] 抓取列表页 第 {cursor.page} 页: {cursor.url}")
            document = await self.news_client.fetch(cursor.url, timeout=adapter.listing_timeout)

            session.state = CrawlState.EXTRACTING_LINKS
            listing = adapter.parse_listing(document, cursor)
            new_links = [link for link in listing.links if session.seen_urls.add(link)]
            if not new_links:
                utils.logger.info(f"[NewsCrawler] 第 {cursor.page} 页没有新的文章链接，结束翻页")
                return
            utils.logger.info(f"[NewsCrawler] 第 {cursor.page} 页发现 {len(new_links)} 个新链接")

            for link in new_links:
                if session.quota_reached:
                    return
                self._raise_if_cancelled()
                article_id = await self._crawl_article(session, adapter, link)
                if article_id:
                    session.saved_ids.append(article_id)
                await self.rate_limiter.wait()

            session.cursor = listing.next_cursor
            if session.cursor is not None and not session.quota_reached:
                await self.rate_limiter.wait()

    async def _crawl_article(self, session: CrawlSession, adapter: SiteAdapter, url: str) -> Optional[str]:
        """抓取/提取/保存单篇文章，失败时记录并跳过，返回文章ID"""
        try:
            session.state = CrawlState.FETCHING_ARTICLE
            document = await self.news_client.fetch(url, timeout=adapter.article_timeout)

            session.state = CrawlState.EXTRACTING_ARTICLE
            article = self._extract_article(adapter, document, url, session.request.category)
            article_id = await self._persist_article(article)
        except (DataFetchError, ContentExtractionError, ArticlePersistError) as e:
            session.state = CrawlState.SKIPPED
            utils.logger.warning(f"[NewsCrawler] 跳过文章 {url}: {e}")
            return None

        session.state = CrawlState.PERSISTED
        utils.logger.info(f"[NewsCrawler] 已保存文章 {article_id}: {article.title}")
        return article_id

    @staticmethod
    def _extract_article(adapter: SiteAdapter, document: HtmlDocument, url: str, category: str) -> NewsArticle:
        try:
            article = adapter.parse_article(document, url, category)
        except Exception as e:
            raise ContentExtractionError(url, e) from e
        if article is None:
            raise ContentExtractionError(url)
        return article

    async def _persist_article(self, article: NewsArticle) -> str:
        try:
            return await self.store.store_content(article)
        except Exception as e:
            raise ArticlePersistError(article.source_url, e) from e

    def _raise_if_cancelled(self) -> None:
        if self.cancel_event.is_set():
            raise CrawlCancelledError("cancel requested")
