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
URL规范化、图片还原、去重集合测试
"""

import asyncio

from media_platform.news.help import (OrderedUrlSet, RandomDelayLimiter, canonicalize_article_link,
                                      restore_original_image_url, to_naver_mobile_url)
from model.m_news import NewsSource


def test_ordered_url_set_keeps_first_seen_order():
    """重复URL只保留第一次出现的位置"""
    urls = OrderedUrlSet()
    assert urls.add("https://a.com/1") is True
    assert urls.add("https://a.com/2") is True
    assert urls.add("https://a.com/1") is False

    assert urls.to_list() == ["https://a.com/1", "https://a.com/2"]
    assert len(urls) == 2
    assert "https://a.com/2" in urls


def test_canonicalize_relative_link_drops_fragment():
    """相对路径补全为绝对URL，去掉锚点"""
    url = canonicalize_article_link("/v/20240501000001?f=o#comment", "https://news.daum.net/economy", NewsSource.DAUM)
    assert url == "https://news.daum.net/v/20240501000001?f=o"


def test_canonicalize_naver_read_link_to_mobile():
    """Naver 旧式链接转换为移动版"""
    url = canonicalize_article_link("https://news.example.com/read.naver?oid=001&aid=999", None, NewsSource.NAVER)
    assert url == "https://n.news.example.com/mnews/article/001/999"


def test_to_naver_mobile_url_keeps_mobile_link():
    url = "https://n.news.naver.com/mnews/article/001/0014000001"
    assert to_naver_mobile_url(url) == url


def test_to_naver_mobile_url_rewrites_mobile_host():
    url = to_naver_mobile_url("https://m.news.naver.com/mnews/article/001/0014000001?sid=101")
    assert url == "https://n.news.naver.com/mnews/article/001/0014000001"


def test_to_naver_mobile_url_without_ids_unchanged():
    """缺少 oid/aid 时原样返回"""
    url = "https://news.naver.com/main/read.naver?mode=LSD&oid=001"
    assert to_naver_mobile_url(url) == url


def test_restore_image_from_fname():
    """缩略图中携带的原图地址"""
    raw = "https://img1.daumcdn.net/thumb/R658x0/?fname=https%3A%2F%2Fcdn.example.com%2Foriginal.jpg"
    assert restore_original_image_url(raw) == "https://cdn.example.com/original.jpg"


def test_restore_image_strips_resize_params():
    raw = "https://imgnews.pstatic.net/image/001/2024/05/01/a.jpg?type=w647"
    assert restore_original_image_url(raw) == "https://imgnews.pstatic.net/image/001/2024/05/01/a.jpg"

    raw = "https://cdn.example.com/a.jpg?W=100&id=5&t=1"
    assert restore_original_image_url(raw) == "https://cdn.example.com/a.jpg?id=5"


def test_restore_image_without_params_unchanged():
    raw = "https://cdn.example.com/a.jpg?id=5"
    assert restore_original_image_url(raw) == raw


def test_random_delay_limiter_zero_range():
    """延迟范围为 0 时立即返回"""
    asyncio.run(RandomDelayLimiter((0, 0)).wait())
