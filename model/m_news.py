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

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class NewsSource(str, Enum):
    """新闻来源"""
    DAUM = "daum"    # 按“下一页”链接翻页
    NAVER = "naver"  # 按 分类代码 + 日期 + 页码 拼接列表页


class NewsArticle(BaseModel):
    """新闻文章"""
    title: str = Field(..., description="文章标题")
    content: str = Field(..., description="文章正文内容，有图片时末尾附图片链接")
    author: Optional[str] = Field(None, description="记者/作者")
    publish_time: Optional[str] = Field(None, description="发布时间，按页面原样保存")
    category: str = Field(..., description="调用方传入的分类")
    source: NewsSource = Field(..., description="新闻来源")
    source_url: str = Field(..., description="规范化后的文章URL")
    images: List[str] = Field(default_factory=list, description="正文图片URL，按首次出现顺序去重")

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value


class CrawlRequest(BaseModel):
    """一次分类爬取请求"""
    source: NewsSource = Field(..., description="新闻来源")
    category: str = Field(default="economy", description="分类，未知分类回退到 economy")
    quota: int = Field(..., gt=0, description="需要保存的文章数量")


class HtmlDocument(BaseModel):
    """一次 GET 请求得到的页面"""
    url: str = Field(..., description="跟随重定向后的最终URL")
    html: str = Field(default="", description="解码后的HTML文本")
    status_code: int = Field(default=200, description="HTTP状态码")


class ListingCursor(BaseModel):
    """指向下一个要抓取的列表页"""
    url: str = Field(..., description="列表页URL")
    page: int = Field(default=1, ge=1, description="页码，从1开始单调递增")
    date: Optional[str] = Field(None, description="按日期分页的来源使用的日期 YYYYMMDD")
    code: Optional[str] = Field(None, description="来源内部的分类代码")


class ListingPage(BaseModel):
    """列表页解析结果"""
    links: List[str] = Field(default_factory=list, description="规范化后的文章链接，按页面顺序")
    next_cursor: Optional[ListingCursor] = Field(None, description="下一页，没有则为空")


class ExtractedNews(BaseModel):
    """正文提取结果（尚未附加图片链接）"""
    title: str
    body: str
    author: Optional[str] = None
    publish_time: Optional[str] = None
    images: List[str] = Field(default_factory=list)
