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
import time
from datetime import datetime
from zoneinfo import ZoneInfo


def get_current_timestamp() -> int:
    """
    获取当前的时间戳(13 位)：1701493264496
    :return:
    """
    return int(time.time() * 1000)


def get_current_date(tz_name: str = "Asia/Seoul") -> str:
    """
    获取指定时区的当前日期：'2023-12-02'
    :param tz_name: IANA 时区名称
    :return:
    """
    return datetime.now(ZoneInfo(tz_name)).strftime('%Y-%m-%d')


def get_compact_date(tz_name: str = "Asia/Seoul") -> str:
    """
    获取指定时区的当前日期(无分隔符)：'20231202'
    列表页按日期分页的站点使用这种格式
    :param tz_name: IANA 时区名称
    :return:
    """
    return datetime.now(ZoneInfo(tz_name)).strftime('%Y%m%d')
