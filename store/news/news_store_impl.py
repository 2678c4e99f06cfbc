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
import csv
import hashlib
import json
import os
from typing import Dict, List, Optional

import aiofiles

import config
from base.base_crawler import AbstractStore
from model.m_news import NewsArticle
from tools import utils
from tools.time_util import get_current_date, get_current_timestamp


def calculate_article_id(source_url: str) -> str:
    """文章ID：规范化URL的MD5"""
    return hashlib.md5(source_url.encode("utf-8")).hexdigest()


def article_to_record(article: NewsArticle) -> Dict:
    record = {"article_id": calculate_article_id(article.source_url)}
    record.update(article.model_dump(mode="json"))
    record["add_ts"] = get_current_timestamp()
    return record


class NewsJsonStoreImplement(AbstractStore):
    """新闻JSON存储：每个来源每天一个文件，文件内容为文章数组"""

    def __init__(self, store_path: Optional[str] = None):
        self.json_dir = os.path.join(store_path or config.DATA_STORE_PATH, "news", "json")
        self.lock = asyncio.Lock()

    def make_save_file_name(self, source: str) -> str:
        return os.path.join(self.json_dir, f"{source}_articles_{get_current_date(config.NEWS_TIMEZONE)}.json")

    async def store_content(self, content_item: NewsArticle) -> str:
        """
        保存文章，同一ID已存在时覆盖

        Args:
            content_item: 新闻文章

        Returns:
            文章ID
        """
        record = article_to_record(content_item)
        json_path = self.make_save_file_name(content_item.source.value)

        async with self.lock:
            os.makedirs(self.json_dir, exist_ok=True)
            articles: List[Dict] = []
            if os.path.exists(json_path):
                async with aiofiles.open(json_path, mode='r', encoding='utf-8') as f:
                    content = await f.read()
                    if content.strip():
                        articles = json.loads(content)

            for i, existing in enumerate(articles):
                if existing.get("article_id") == record["article_id"]:
                    articles[i] = record
                    break
            else:
                articles.append(record)

            async with aiofiles.open(json_path, mode='w', encoding='utf-8') as f:
                await f.write(json.dumps(articles, ensure_ascii=False, indent=2))

        utils.logger.debug(f"[NewsJsonStoreImplement] 文章已保存到JSON: {json_path}")
        return record["article_id"]


class NewsCsvStoreImplement(AbstractStore):
    """新闻CSV存储：每个来源每天一个文件，追加写入"""

    FIELDNAMES = [
        "article_id", "title", "content", "author", "publish_time",
        "category", "source", "source_url", "images", "add_ts",
    ]

    def __init__(self, store_path: Optional[str] = None):
        self.csv_dir = os.path.join(store_path or config.DATA_STORE_PATH, "news", "csv")
        self.lock = asyncio.Lock()

    def make_save_file_name(self, source: str) -> str:
        return os.path.join(self.csv_dir, f"{source}_articles_{get_current_date(config.NEWS_TIMEZONE)}.csv")

    async def store_content(self, content_item: NewsArticle) -> str:
        record = article_to_record(content_item)
        record["images"] = "\n".join(record["images"])
        csv_path = self.make_save_file_name(content_item.source.value)

        async with self.lock:
            os.makedirs(self.csv_dir, exist_ok=True)
            async with aiofiles.open(csv_path, mode='a+', encoding='utf-8-sig', newline='') as f:
                writer = csv.writer(f)
                if await f.tell() == 0:
                    await writer.writerow(self.FIELDNAMES)
                await writer.writerow([record.get(name) or "" for name in self.FIELDNAMES])

        utils.logger.debug(f"[NewsCsvStoreImplement] 文章已保存到CSV: {csv_path}")
        return record["article_id"]
