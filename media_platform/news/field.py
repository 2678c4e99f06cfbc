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
import re
from enum import Enum
from types import MappingProxyType


class CrawlState(Enum):
    """单次爬取会话的状态"""
    INIT = "init"
    FETCHING_LISTING = "fetching_listing"
    EXTRACTING_LINKS = "extracting_links"
    FETCHING_ARTICLE = "fetching_article"
    EXTRACTING_ARTICLE = "extracting_article"
    PERSISTED = "persisted"
    SKIPPED = "skipped"
    DONE = "done"


# 未知分类统一回退到该分类
DEFAULT_CATEGORY = "economy"

# Daum 分类 -> 列表页URL
DAUM_CATEGORY_URLS = MappingProxyType({
    "politics": "https://news.daum.net/politics",
    "economy": "https://news.daum.net/economy",
    "society": "https://news.daum.net/society",
    "world": "https://news.daum.net/world",
    "digital": "https://news.daum.net/digital",
})

# Naver 分类 -> sid1 分类代码
NAVER_CATEGORY_SID1 = MappingProxyType({
    "politics": "100",
    "economy": "101",
    "society": "102",
    "world": "104",
    "digital": "105",  # IT/科学
})

# Naver URL模板
NAVER_URLS = MappingProxyType({
    'list': 'https://news.naver.com/main/list.naver?mode=LSD&mid=sec&sid1={sid1}&date={date}&page={page}',
    'mobile_article': 'https://{host}/mnews/article/{oid}/{aid}',
})

# 缩略图URL中携带原图地址的参数
IMAGE_ORIGIN_PARAM = "fname"

# 图片URL中需要去掉的缩放/追踪参数（忽略大小写）
IMAGE_RESIZE_PARAMS = ("type", "w", "t")

# JSON-LD 中视为文章的 @type（忽略大小写）
ARTICLE_LD_TYPES = ("article", "newsarticle")

# 列表页“下一页/更多”链接的文本
NEXT_PAGE_TEXT_RE = re.compile(r"다음|더보기|Next|›")


# Daum 页面选择器
DAUM_SELECTORS = MappingProxyType({
    # 列表页
    'article_link': 'a[href*="/v/"]',
    'next_page_class': '.paging a.next',
    'pagination_container': '.paging, nav',
    'next_page_rel': 'a[rel~="next"]',
    'next_page_query': 'a[href*="page="]',

    # 文章页
    'title_meta': 'meta[property="og:title"]',
    'title': ('h3.tit_view',),
    'content_container': ('#harmonyContainer', '#mArticle'),
    'noise_blocks': (
        'aside, nav, .btn_util, .util_view, .voice_area, .translate_btn, '
        '.tool_trans, .copyright, .foot_view, .relate_news, .kakao_ad, '
        '.ad_player, .realtime_view, .keyword_view'
    ),
    'section_paragraphs': 'section p',
    'paragraphs': 'p',
    'container_text_fallback': False,
    'publish_time_meta': (
        'meta[property="article:published_time"]',
        'meta[name="date"]',
        'meta[name="pubdate"]',
    ),
    'publish_time_element': (),
    'author': ('.info_view .txt_info', '.name_reporter'),
    'images': 'section img[src], section img[data-src], img[srcset]',
})


# Naver 页面选择器（文章页以移动版 n.news 为准）
NAVER_SELECTORS = MappingProxyType({
    # 列表页：PC 版 read.naver 和移动版 mnews 两种链接都接受
    'article_link': 'a[href*="read.naver"], a[href*="/mnews/article/"]',

    # 文章页
    'title_meta': 'meta[property="og:title"]',
    'title': ('h2.media_end_head_headline', 'h2#title_area'),
    'content_container': ('#dic_area', '#newsct_article'),
    'noise_blocks': (
        'script, style, aside, figure[data-type="photo-raw"], '
        '.promotion, .media_end_categorize, .end_photo_org'
    ),
    'section_paragraphs': 'section p',
    'paragraphs': 'p',
    'container_text_fallback': True,  # 移动版正文多为 <br> 分隔的纯文本
    'publish_time_meta': ('meta[property="article:published_time"]',),
    'publish_time_element': ('span.media_end_head_info_datestamp_time', 'time'),
    'author': (
        '.media_end_head_journalist_name',
        'span.byline',
        '[class*="journalistcard_summary_name"]',
    ),
    'images': 'img',
})

# 视为限流的状态码，客户端内部等待后无限重试
RATE_LIMIT_STATUS_CODES = (429, 503)
