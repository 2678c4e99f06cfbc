# 声明：本代码仅供学习和研究目的使用。使用者应遵守以下原则：
# 1. 不得用于任何商业用途。
# 2. 使用时应遵守目标平台的使用条款和robots.txt规则。
# 3. 不得进行大规模爬取或对平台造成运营干扰。
# 4. 应合理控制请求频率，避免给目标平台带来不必要的负担。
# 5. 不得用于任何非法或不当的用途。
#
# 详细许可条款请参阅项目根目录下的LICENSE文件。
# 使用本代码即表示您同意遵守上述原则和LICENSE中的所有条款。


from abc import ABC, abstractmethod
from typing import Any, List


class AbstractCrawler(ABC):
    @abstractmethod
    async def start(self):
        """
        start crawler
        """
        pass

    @abstractmethod
    async def crawl(self, request: Any) -> List[str]:
        """
        执行一次爬取请求
        :param request: 爬取请求
        :return: 已保存内容的ID列表
        """
        pass


class AbstractStore(ABC):
    @abstractmethod
    async def store_content(self, content_item: Any) -> str:
        """
        保存单条内容
        :param content_item: 内容项
        :return: 存储层分配的ID
        """
        pass


class AbstractApiClient(ABC):
    @abstractmethod
    async def request(self, method, url, **kwargs):
        pass


class AbstractRateLimiter(ABC):
    """请求之间的礼貌等待，可以替换成令牌桶等其他实现"""

    @abstractmethod
    async def wait(self) -> None:
        pass
