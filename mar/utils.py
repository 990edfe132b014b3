"""MAR 通用工具：报告月份解析、日期构造、时间解析。"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time
from typing import Optional, Tuple

from django.core.exceptions import ValidationError

from mar.models.choices import MAX_DAY

_MONTH_NAMES = {name.lower(): index for index, name in enumerate(calendar.month_name) if name}
_MONTH_ABBRS = {name.lower(): index for index, name in enumerate(calendar.month_abbr) if name}

_ISO_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")
_SLASH_MONTH_RE = re.compile(r"^(\d{1,2})/(\d{4})$")
_NAMED_MONTH_RE = re.compile(r"^([A-Za-z]+)\.?\s+(\d{4})$")

TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M%p")


def parse_month_year(value: str) -> Tuple[int, int]:
    """
    【功能说明】
    - 将表单的报告月份解析为 (year, month)。

    【参数说明】
    - value: 支持 "2025-11"、"11/2025"、"November 2025"、"Nov 2025" 四种写法。

    【返回值说明】
    - (year, month) 元组；无法识别时抛出 ValidationError。
    """

    raw = (value or "").strip()
    year = month = None

    match = _ISO_MONTH_RE.match(raw)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
    else:
        match = _SLASH_MONTH_RE.match(raw)
        if match:
            month, year = int(match.group(1)), int(match.group(2))
        else:
            match = _NAMED_MONTH_RE.match(raw)
            if match:
                name = match.group(1).lower()
                month = _MONTH_NAMES.get(name) or _MONTH_ABBRS.get(name)
                year = int(match.group(2))

    if year is None or month is None or not 1 <= month <= 12:
        raise ValidationError(f"Unrecognized month: {value!r}. Use YYYY-MM.")
    return year, month


def format_month_year(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def normalize_month_year(value: str) -> str:
    """任意受支持写法 -> 规范化的 YYYY-MM。"""
    return format_month_year(*parse_month_year(value))


def date_for_day(year: int, month: int, day: int) -> Optional[date]:
    """构造报告月份中第 day 天的日期；不存在的日期（如 2 月 30 日）返回 None。"""
    try:
        return date(year, month, day)
    except ValueError:
        return None


def validate_day(day: int) -> int:
    try:
        day = int(day)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Day must be a number between 1 and 31.") from exc
    if not 1 <= day <= MAX_DAY:
        raise ValidationError("Day must be a number between 1 and 31.")
    return day


def parse_time(value) -> Optional[time]:
    """解析 "08:00" / "8:00 PM" 等时间文本；空值返回 None。"""
    if value is None or isinstance(value, time):
        return value
    raw = str(value).strip()
    if not raw:
        return None
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(raw.upper(), fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time: {value!r}. Use HH:MM.")


def parse_date(value) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    raw = str(value).strip()
    if not raw:
        return None
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {value!r}. Use YYYY-MM-DD.") from exc
