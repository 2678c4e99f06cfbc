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
from typing import Dict, Optional

import httpx
from tenacity import AsyncRetrying, RetryCallState, RetryError, retry_if_exception_type, stop_when_event_set, wait_fixed

import config
from base.base_crawler import AbstractApiClient
from model.m_news import HtmlDocument
from tools import utils

from .exception import CrawlCancelledError, DataFetchError, RateLimitedError
from .field import RATE_LIMIT_STATUS_CODES


class NewsClient(AbstractApiClient):
    """新闻站点 HTTP 客户端"""

    def __init__(self,
                 timeout: Optional[float] = None,
                 cancel_event: Optional[asyncio.Event] = None,
                 rate_limit_backoff: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 user_agent: Optional[str] = None):
        self.timeout = config.NEWS_DEFAULT_TIMEOUT if timeout is None else timeout
        self.cancel_event = cancel_event or asyncio.Event()
        self.rate_limit_backoff = (
            config.NEWS_RATE_LIMIT_BACKOFF_SEC if rate_limit_backoff is None else rate_limit_backoff
        )
        self.transport = transport
        self.headers: Dict[str, str] = {
            "User-Agent": user_agent or config.UA,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7",
        }

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """
        单次请求，不做重试
        429 / 503 抛出 RateLimitedError，其他非 2xx 及网络错误抛出 DataFetchError
        """
        timeout = kwargs.pop("timeout", None) or self.timeout
        try:
            async with httpx.AsyncClient(headers=self.headers,
                                         follow_redirects=True,
                                         timeout=timeout,
                                         transport=self.transport) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise DataFetchError(url, e) from e

        if response.status_code in RATE_LIMIT_STATUS_CODES:
            raise RateLimitedError(url, response.status_code)
        if not response.is_success:
            raise DataFetchError(url, f"HTTP {response.status_code}")
        return response

    async def fetch(self, url: str, timeout: Optional[float] = None) -> HtmlDocument:
        """
        GET 一个页面，跟随重定向

        遇到限流时固定等待 rate_limit_backoff 秒后重试，重试次数不设上限，
        只有 cancel_event 被设置时才会停止（抛出 CrawlCancelledError）

        Args:
            url: 页面URL
            timeout: 本次请求的超时时间（秒）

        Returns:
            页面内容，url 为重定向后的最终地址
        """
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(RateLimitedError),
                wait=wait_fixed(self.rate_limit_backoff),
                stop=stop_when_event_set(self.cancel_event),
                sleep=self._interruptible_sleep,
                before_sleep=self._log_rate_limited,
                reraise=False,
            ):
                with attempt:
                    self._raise_if_cancelled(url)
                    response = await self.request("GET", url, timeout=timeout)
        except RetryError as e:
            raise CrawlCancelledError(f"cancelled while rate limited: {url}") from e

        return HtmlDocument(url=str(response.url), html=response.text, status_code=response.status_code)

    def _raise_if_cancelled(self, url: str) -> None:
        if self.cancel_event.is_set():
            raise CrawlCancelledError(f"cancelled before fetching: {url}")

    async def _interruptible_sleep(self, seconds: float) -> None:
        """等待退避时间，期间被取消则立即返回"""
        if seconds <= 0:
            return
        try:
            await asyncio.wait_for(self.cancel_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    @staticmethod
    def _log_rate_limited(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception()
        utils.logger.warning(
            f"[NewsClient] {error}, 第 {retry_state.attempt_number} 次被限流，"
            f"{retry_state.next_action.sleep:.1f} 秒后重试"
        )
