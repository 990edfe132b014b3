"""
用药行生效窗口判定。

规则：
1. 生命体征行不受起止日期约束，表单内 1-31 日全部生效。
2. 用药行只在 “开始日期所在月份 == 表单报告月份” 时才可能生效；
   跨月延续的用药不会在新月份表单上回溯标记为生效（已知的建模简化，保留）。
3. 生效条件：day >= 开始日的日号，且（无停止日期 或 当日日期 <= 停止日期）。
4. 报告月份中不存在的日期（如 2 月 30 日）视为不生效，不抛异常。
"""

from __future__ import annotations

from typing import List, Tuple

from mar.models import LineItem
from mar.models.choices import MAX_DAY
from mar.utils import date_for_day

FormMonth = Tuple[int, int]


def is_active(line_item: LineItem, form_month: FormMonth, day: int) -> bool:
    """
    【功能说明】
    - 判断某一用药行在表单报告月份的第 day 天是否处于生效窗口。

    【参数说明】
    - line_item: LineItem，用药或生命体征行。
    - form_month: (year, month)，由 parse_month_year 解析得到。
    - day: int，1-31。

    【返回值说明】
    - bool。
    """

    if line_item.is_vitals:
        return 1 <= day <= MAX_DAY

    start = line_item.start_date
    if start is None:
        return False
    year, month = form_month
    if (start.year, start.month) != (year, month):
        return False
    if day < start.day:
        return False

    current = date_for_day(year, month, day)
    if current is None:
        return False
    stop = line_item.stop_date
    return stop is None or current <= stop


def active_days(line_item: LineItem, form_month: FormMonth) -> List[int]:
    """返回该行在报告月份内所有生效的日号。"""
    return [day for day in range(1, MAX_DAY + 1) if is_active(line_item, form_month, day)]
