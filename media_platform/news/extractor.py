# 声明：本代码仅供学习和研究目的使用。使用者应遵守以下原则：
# 1. 不得用于任何商业用途。
# 2. 使用时应遵守目标平台的使用条款和robots.txt规则。
# 3. 不得进行大规模爬取或对平台造成运营干扰。
# 4. 应合理控制请求频率，避免给目标平台带来不必要的负担。
# 5. 不得用于任何非法或不当的用途。
#
# 详细许可条款请参阅项目根目录下的LICENSE文件。
# 使用本代码即表示您同意遵守上述原则和LICENSE中的所有条款。


import json
from typing import Any, Iterable, Iterator, List, Mapping, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

import config
from model.m_news import ExtractedNews, HtmlDocument
from tools import utils

from .field import ARTICLE_LD_TYPES
from .help import OrderedUrlSet, restore_original_image_url


def _clean_text(text: Optional[str]) -> str:
    return " ".join((text or "").split())


class NewsArticleExtractor:
    """新闻文章内容提取器"""

    def __init__(self,
                 noise_contains: Optional[Iterable[str]] = None,
                 noise_prefixes: Optional[Iterable[str]] = None,
                 min_structured_body_length: Optional[int] = None,
                 images_marker: Optional[str] = None):
        self.noise_contains = tuple(config.NEWS_NOISE_CONTAINS if noise_contains is None else noise_contains)
        self.noise_prefixes = tuple(config.NEWS_NOISE_PREFIXES if noise_prefixes is None else noise_prefixes)
        self.min_structured_body_length = (
            config.NEWS_MIN_STRUCTURED_BODY_LENGTH if min_structured_body_length is None
            else min_structured_body_length
        )
        self.images_marker = images_marker or config.NEWS_IMAGES_MARKER

    def extract(self, document: HtmlDocument, selectors: Mapping[str, Any]) -> Optional[ExtractedNews]:
        """
        提取文章标题/正文/作者/发布时间/图片

        正文按顺序尝试：
        1. JSON-LD 中的 articleBody（发布方已清洗，优先）
        2. 正文容器内的段落，过滤掉界面/版权等噪声文本

        Args:
            document: 文章页
            selectors: 来源对应的选择器表，见 field.py

        Returns:
            提取结果，标题或正文为空时返回None
        """
        soup = BeautifulSoup(document.html, "html.parser")

        body = self.extract_body_from_json_ld(soup)

        container = self.find_container(soup, selectors)
        if container is not None:
            self.remove_noise_blocks(container, selectors)

        if not body:
            body = self.extract_body_from_dom(container, selectors)

        if not body:
            utils.logger.info(f"[NewsArticleExtractor] 未提取到正文: {document.url}")
            return None

        title = self.extract_title(soup, selectors)
        if not title:
            utils.logger.info(f"[NewsArticleExtractor] 未提取到标题: {document.url}")
            return None

        return ExtractedNews(
            title=title,
            body=body,
            author=self.extract_author(soup, selectors),
            publish_time=self.extract_publish_time(soup, selectors),
            images=self.collect_images(container, selectors, document.url),
        )

    def compose_content(self, extracted: ExtractedNews) -> str:
        """正文 + 图片链接（每行一个）"""
        if not extracted.images:
            return extracted.body
        return f"{extracted.body}\n\n{self.images_marker}\n" + "\n".join(extracted.images)

    # ==================== 正文 ====================

    def extract_body_from_json_ld(self, soup: BeautifulSoup) -> str:
        """JSON-LD 中第一个足够长的 articleBody"""
        for script in soup.select('script[type="application/ld+json"]'):
            raw = script.string or script.get_text()
            if not raw or not raw.strip():
                continue
            try:
                data = json.loads(raw)
            except ValueError as e:
                utils.logger.debug(f"[NewsArticleExtractor] 跳过无法解析的JSON-LD: {e}")
                continue

            for node in self._iter_ld_nodes(data):
                if not self._is_article_node(node):
                    continue
                body = node.get("articleBody")
                if isinstance(body, str) and len(body.strip()) > self.min_structured_body_length:
                    return body.strip()
        return ""

    @classmethod
    def _iter_ld_nodes(cls, data: Any) -> Iterator[dict]:
        if isinstance(data, list):
            for item in data:
                yield from cls._iter_ld_nodes(item)
        elif isinstance(data, dict):
            yield data
            graph = data.get("@graph")
            if isinstance(graph, list):
                yield from cls._iter_ld_nodes(graph)

    @staticmethod
    def _is_article_node(node: dict) -> bool:
        ld_type = node.get("@type")
        ld_types = ld_type if isinstance(ld_type, list) else [ld_type]
        return any(isinstance(t, str) and t.lower() in ARTICLE_LD_TYPES for t in ld_types)

    @staticmethod
    def find_container(soup: BeautifulSoup, selectors: Mapping[str, Any]) -> Optional[Tag]:
        for selector in selectors['content_container']:
            container = soup.select_one(selector)
            if container is not None:
                return container
        return None

    @staticmethod
    def remove_noise_blocks(container: Tag, selectors: Mapping[str, Any]) -> None:
        """去掉分享/翻译/打印按钮、广告、相关新闻等非正文区域"""
        for element in container.select(selectors['noise_blocks']):
            if not element.decomposed:
                element.decompose()

    def extract_body_from_dom(self, container: Optional[Tag], selectors: Mapping[str, Any]) -> str:
        if container is None:
            return ""

        paragraphs = [p.get_text(" ") for p in container.select(selectors['section_paragraphs'])]
        if not paragraphs:
            paragraphs = [p.get_text(" ") for p in container.select(selectors['paragraphs'])]
        if not paragraphs and selectors['container_text_fallback']:
            paragraphs = container.get_text("\n").split("\n")

        kept = []
        for paragraph in paragraphs:
            text = _clean_text(paragraph)
            if not text or self.is_noise(text):
                continue
            kept.append(text)
        return "\n\n".join(kept)

    def is_noise(self, text: str) -> bool:
        if any(marker in text for marker in self.noise_contains):
            return True
        return text.startswith(self.noise_prefixes)

    # ==================== 元数据 ====================

    @staticmethod
    def _meta_content(soup: BeautifulSoup, selector: str) -> Optional[str]:
        element = soup.select_one(selector)
        if element is None:
            return None
        value = (element.get("content") or "").strip()
        return value or None

    def extract_title(self, soup: BeautifulSoup, selectors: Mapping[str, Any]) -> Optional[str]:
        title = self._meta_content(soup, selectors['title_meta'])
        if title:
            return title
        for selector in selectors['title']:
            element = soup.select_one(selector)
            if element is not None and _clean_text(element.get_text(" ")):
                return _clean_text(element.get_text(" "))
        return None

    @staticmethod
    def extract_author(soup: BeautifulSoup, selectors: Mapping[str, Any]) -> Optional[str]:
        for selector in selectors['author']:
            element = soup.select_one(selector)
            if element is not None and _clean_text(element.get_text(" ")):
                return _clean_text(element.get_text(" "))
        return None

    def extract_publish_time(self, soup: BeautifulSoup, selectors: Mapping[str, Any]) -> Optional[str]:
        """发布时间按页面原样返回，不做解析"""
        for selector in selectors['publish_time_meta']:
            value = self._meta_content(soup, selector)
            if value:
                return value
        for selector in selectors['publish_time_element']:
            element = soup.select_one(selector)
            if element is None:
                continue
            value = element.get("datetime") or element.get("data-date-time") or element.get_text(" ")
            value = value.strip()
            if value:
                return value
        return None

    # ==================== 图片 ====================

    def collect_images(self, container: Optional[Tag], selectors: Mapping[str, Any], page_url: str) -> List[str]:
        """正文图片URL（懒加载地址优先，缩略图还原为原图），按首次出现顺序去重"""
        if container is None:
            return []

        images = OrderedUrlSet()
        for img in container.select(selectors['images']):
            src = self._image_source(img)
            if not src or src.startswith("data:"):
                continue
            try:
                images.add(restore_original_image_url(urljoin(page_url, src)))
            except ValueError as e:
                utils.logger.debug(f"[NewsArticleExtractor] 跳过无效图片地址 {src!r}: {e}")
        return images.to_list()

    @staticmethod
    def _image_source(img: Tag) -> str:
        src = img.get("data-src") if img.has_attr("data-src") else img.get("src")
        src = (src or "").strip()
        if not src and img.get("srcset"):
            candidates = img["srcset"].split(",")[0].split()
            src = candidates[0] if candidates else ""
        return src
