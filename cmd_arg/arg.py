# 声明：本代码仅供学习和研究目的使用。使用者应遵守以下原则：
# 1. 不得用于任何商业用途。
# 2. 使用时应遵守目标平台的使用条款和robots.txt规则。
# 3. 不得进行大规模爬取或对平台造成运营干扰。
# 4. 应合理控制请求频率，避免给目标平台带来不必要的负担。
# 5. 不得用于任何非法或不当的用途。
#
# 详细许可条款请参阅项目根目录下的LICENSE文件。
# 使用本代码即表示您同意遵守上述原则和LICENSE中的所有条款。


import argparse
from typing import List, Optional

import config
from model.m_news import NewsSource


async def parse_cmd(argv: Optional[List[str]] = None):
    # 读取command arg
    parser = argparse.ArgumentParser(description='News crawler program.')
    parser.add_argument('--platform', type=str, help='Media platform select (news)',
                        choices=["news"], default=config.PLATFORM)
    parser.add_argument('--source', type=str, help='News source (daum | naver)',
                        choices=[source.value for source in NewsSource], default=config.NEWS_SOURCE)
    parser.add_argument('--category', type=str,
                        help='News category (politics | economy | society | world | digital)',
                        default=config.NEWS_CATEGORY)
    parser.add_argument('--quota', type=int, help='Number of articles to save',
                        default=config.NEWS_QUOTA)
    parser.add_argument('--save_data_option', type=str, help='where to save the data (csv or json)',
                        choices=['csv', 'json'], default=config.SAVE_DATA_OPTION)
    parser.add_argument('--crawl_timeout', type=int, help='Max seconds for one crawl, 0 means unlimited',
                        default=config.NEWS_CRAWL_TIMEOUT)

    args = parser.parse_args(argv)

    # override config
    config.PLATFORM = args.platform
    config.NEWS_SOURCE = args.source
    config.NEWS_CATEGORY = args.category
    config.NEWS_QUOTA = args.quota
    config.SAVE_DATA_OPTION = args.save_data_option
    config.NEWS_CRAWL_TIMEOUT = args.crawl_timeout
