"""
停用（DC）级联。

当护士在某一天选择停用代码时：
1. 当天记录按普通给药写入（由 administration 服务完成）；
2. 为当天之后直到 31 日的每一天合成占位记录（status=Given, initials=停用代码，无给药时间）；
3. 占位记录按 (line_item, day) 一次性批量 upsert，重复执行结果一致；
   注意：会无条件覆盖这些日子已有的记录（包括真实给药），这是已知的破坏性边界；
4. 批量写入后整体重读该行的全部记录，而不是局部修补。

批量写入失败时不回滚当天记录，只记录告警并返回软提示。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from django.conf import settings
from django.db import DatabaseError, transaction

from mar.models import AdministrationMark, LineItem, choices

logger = logging.getLogger(__name__)

CASCADE_FAILED_WARNING = (
    "Administration saved, but future days could not be marked as discontinued. "
    "Select the discontinue code again to retry."
)


def discontinued_code() -> str:
    return getattr(settings, "MAR_DISCONTINUED_CODE", "DC")


def _mark_code(mark) -> str:
    return (getattr(mark, "initials", "") or "").strip().upper()


@dataclass
class CascadeResult:
    origin_day: int
    written: int = 0
    warning: str = ""
    marks: Dict[int, AdministrationMark] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.warning


def find_discontinuation_origin(marks: Mapping[int, AdministrationMark], day: int) -> Optional[int]:
    """
    【功能说明】
    - 查找 day 之前最早一个带停用代码的日号（从 1 日向后扫描，遇到即停）。

    【返回值说明】
    - int | None：停用起点；day 本身及之前未被停用时返回 None。
    """

    code = discontinued_code()
    for check_day in range(1, day):
        mark = marks.get(check_day)
        if mark is not None and _mark_code(mark) == code:
            return check_day
    return None


def is_discontinued(marks: Mapping[int, AdministrationMark], day: int) -> bool:
    return find_discontinuation_origin(marks, day) is not None


def build_placeholder_marks(line_item: LineItem, day: int) -> List[AdministrationMark]:
    """为 day+1 至 31 日构造未保存的停用占位记录。"""
    code = discontinued_code()
    return [
        AdministrationMark(
            line_item=line_item,
            day=future_day,
            status=choices.AdministrationStatus.GIVEN,
            initials=code,
            administered_at=None,
        )
        for future_day in range(day + 1, choices.MAX_DAY + 1)
    ]


def cascade_discontinuation(line_item: LineItem, day: int) -> CascadeResult:
    """
    【功能说明】
    - 将停用状态传播到 day 之后的所有日期，并返回重读后的完整记录表。

    【参数说明】
    - line_item: 已写入停用代码的用药行。
    - day: 选择停用代码的日号。

    【返回值说明】
    - CascadeResult；批量写入失败时 warning 非空，但调用方仍应视为成功。
    """

    result = CascadeResult(origin_day=day)
    placeholders = build_placeholder_marks(line_item, day)
    if placeholders:
        try:
            # 独立保存点：失败不影响已提交的当天记录
            with transaction.atomic():
                AdministrationMark.objects.bulk_upsert(placeholders)
            result.written = len(placeholders)
        except DatabaseError as exc:
            logger.warning(
                "停用级联写入失败 line_item=%s day=%s: %s", line_item.pk, day, exc
            )
            result.warning = CASCADE_FAILED_WARNING
        else:
            logger.info(
                "停用级联完成 line_item=%s origin_day=%s written=%s",
                line_item.pk,
                day,
                result.written,
            )

    result.marks = AdministrationMark.objects.day_map(line_item.pk)
    return result
