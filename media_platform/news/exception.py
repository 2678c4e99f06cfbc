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
from typing import Optional, Union


class NewsCrawlerError(Exception):
    """新闻爬虫异常基类"""


class DataFetchError(NewsCrawlerError):
    """网络错误、超时或非 2xx 响应（限流除外）"""

    def __init__(self, url: str, cause: Union[BaseException, str, None] = None):
        self.url = url
        self.cause = cause
        super().__init__(f"fetch {url} failed: {cause}")


class RateLimitedError(NewsCrawlerError):
    """429 / 503，由客户端内部等待重试，不会抛给调用方"""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"rate limited ({status_code}): {url}")


class ContentExtractionError(NewsCrawlerError):
    """文章页中找不到可用的标题或正文"""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        message = f"no usable title/content: {url}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class ArticlePersistError(NewsCrawlerError):
    """存储层拒绝保存文章"""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        super().__init__(f"store {url} failed: {cause}")


class CrawlCancelledError(NewsCrawlerError):
    """调用方要求停止本次爬取"""
