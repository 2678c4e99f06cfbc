# 声明：本代码仅供学习和研究目的使用。使用者应遵守以下原则：
# 1. 不得用于任何商业用途。
# 2. 使用时应遵守目标平台的使用条款和robots.txt规则。
# 3. 不得进行大规模爬取或对平台造成运营干扰。
# 4. 应合理控制请求频率，避免给目标平台带来不必要的负担。
# 5. 不得用于任何非法或不当的用途。
#
# 详细许可条款请参阅项目根目录下的LICENSE文件。
# 使用本代码即表示您同意遵守上述原则和LICENSE中的所有条款。


# 基础配置
PLATFORM = "news"

# 请求使用的 User Agent
UA = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"

# 数据保存类型选项配置,支持两种类型：csv、json
SAVE_DATA_OPTION = "json"  # csv or json

# 数据文件保存根目录
DATA_STORE_PATH = "data"

# ==================== 新闻平台配置 ====================
# 新闻来源 daum | naver
NEWS_SOURCE = "daum"

# 新闻分类 politics | economy | society | world | digital，未知分类回退到 economy
NEWS_CATEGORY = "economy"

# 本次需要保存的文章数量
NEWS_QUOTA = 5

# 单次请求允许的最大文章数量（请求入口会把 NEWS_QUOTA 限制在 1 ~ NEWS_MAX_QUOTA）
NEWS_MAX_QUOTA = 50

# 整次爬取的最长耗时（秒），到时后在下一个等待点停止并返回已保存的文章，0 表示不限制
NEWS_CRAWL_TIMEOUT = 0

# 遇到 429 / 503 时的固定等待时间（秒），重试次数不设上限
NEWS_RATE_LIMIT_BACKOFF_SEC = 5

# 每篇文章抓取后、每次翻页后的随机礼貌延迟范围（秒）
NEWS_POLITE_DELAY_RANGE = (0.2, 0.6)

# 未指定超时时使用的默认请求超时时间（秒）
NEWS_DEFAULT_TIMEOUT = 15

# 列表页、文章页的请求超时时间（秒）
DAUM_LISTING_TIMEOUT = 15
DAUM_ARTICLE_TIMEOUT = 10
NAVER_LISTING_TIMEOUT = 15
NAVER_ARTICLE_TIMEOUT = 12

# 按日期分页的来源使用的时区（决定“今天”是哪一天）
NEWS_TIMEZONE = "Asia/Seoul"

# 结构化数据(JSON-LD)中 articleBody 的最小长度，不超过该长度则回退到 DOM 提取
NEWS_MIN_STRUCTURED_BODY_LENGTH = 50

# 正文末尾追加图片链接时使用的分隔标记
NEWS_IMAGES_MARKER = "[IMAGES]"

# 段落噪声过滤：包含以下任一文本的段落会被丢弃（与部署地区的语言相关）
NEWS_NOISE_CONTAINS = (
    "번역beta",
    "무단전재",
    "재배포 금지",
)

# 段落噪声过滤：以下列任一文本开头的段落会被丢弃
NEWS_NOISE_PREFIXES = (
    "Translated by",
    "글씨크기",
    "인쇄하기",
)
