"""
给药记录状态机。

单元格（line_item, day）的状态：
- 无记录（unset）
- Given：写入缩写与给药时间
- Not Given：保留缩写，清空给药时间
- PRN：按需给药
- 停用（discontinued）：由停用起点之后的日期推导而来，不是独立存储的状态

转换规则：
1. 非生效日、已停用日期、日号越界、未知状态一律在写库前拒绝（ValidationError）；
2. 对不存在的记录设置 Not Given 为空操作，不创建“负记录”；
3. 写入停用代码（Given + 停用代码）后触发停用级联；
4. 每次成功写入后返回重读的整行记录。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from django.core.exceptions import ValidationError
from django.utils import timezone

from mar.models import AdministrationMark, LineItem, choices
from mar.service.active_window import is_active
from mar.service.discontinuation import (
    CascadeResult,
    cascade_discontinuation,
    discontinued_code,
    find_discontinuation_origin,
)
from mar.utils import parse_month_year, validate_day
from users.services import resolve_default_initials

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Administration record updated successfully!"
NOTE_SAVED_MESSAGE = "Note updated."

AdministrationStatus = choices.AdministrationStatus
CellState = choices.CellState


@dataclass
class AdministrationResult:
    """一次单元格写入的结果；saved=False 表示合法的空操作。"""

    line_item_id: int
    day: int
    saved: bool = False
    mark: Optional[AdministrationMark] = None
    marks: Dict[int, AdministrationMark] = field(default_factory=dict)
    cascade: Optional[CascadeResult] = None
    message: str = ""
    warning: str = ""


def get_line_item(line_item_id) -> LineItem:
    try:
        return LineItem.objects.select_related("form").get(pk=line_item_id)
    except (LineItem.DoesNotExist, ValueError, TypeError) as exc:
        raise ValidationError("Line item not found.") from exc


def _ensure_editable(line_item: LineItem, day: int, marks) -> None:
    form_month = parse_month_year(line_item.form.month_year)
    if not is_active(line_item, form_month, day):
        if line_item.is_vitals:
            raise ValidationError("Vital signs entry is not active on this day.")
        raise ValidationError("Medication not active on this day.")

    if line_item.is_vitals:
        return
    origin = find_discontinuation_origin(marks, day)
    if origin is not None:
        raise ValidationError(
            f"Medication discontinued on day {origin}. Cannot edit future days. "
            "Add a new medication to continue."
        )


def _normalize_initials(line_item: LineItem, initials) -> str:
    value = (initials or "").strip()
    # 生命体征行的“缩写”实为测量值，原样保存
    if line_item.is_vitals:
        return value
    return value.upper()


def _load(line_item_id, day) -> Tuple[LineItem, int, Dict[int, AdministrationMark]]:
    day = validate_day(day)
    line_item = get_line_item(line_item_id)
    marks = AdministrationMark.objects.day_map(line_item.pk)
    _ensure_editable(line_item, day, marks)
    return line_item, day, marks


def set_administration(
    line_item_id,
    day,
    status: str,
    initials: str = "",
    clinician=None,
) -> AdministrationResult:
    """
    【功能说明】
    - 设置某一单元格的给药状态，必要时触发停用级联。

    【参数说明】
    - line_item_id: 用药行 ID。
    - day: 1-31。
    - status: Given / Not Given / PRN。
    - initials: 缩写或代码；为空时 Given 使用护士的默认缩写，Not Given 保留原缩写。
    - clinician: 当前护士（CustomUser），用于解析默认缩写。

    【返回值说明】
    - AdministrationResult；marks 为写入后重读的整行记录。
    """

    if status not in AdministrationStatus.values:
        raise ValidationError(f"Unknown administration status: {status!r}.")
    line_item, day, marks = _load(line_item_id, day)

    existing = marks.get(day)
    if status == AdministrationStatus.NOT_GIVEN and existing is None:
        return AdministrationResult(line_item_id=line_item.pk, day=day, marks=marks)

    code = _normalize_initials(line_item, initials)
    if not code:
        if status == AdministrationStatus.NOT_GIVEN:
            code = existing.initials
        else:
            code = resolve_default_initials(clinician) or ""

    administered_at = timezone.now() if status == AdministrationStatus.GIVEN else None
    mark, _ = AdministrationMark.objects.update_or_create(
        line_item=line_item,
        day=day,
        defaults={
            "status": status,
            "initials": code,
            "administered_at": administered_at,
        },
    )
    logger.info(
        "给药记录已更新 line_item=%s day=%s status=%s initials=%s",
        line_item.pk,
        day,
        status,
        code,
    )

    result = AdministrationResult(
        line_item_id=line_item.pk,
        day=day,
        saved=True,
        mark=mark,
        message=SUCCESS_MESSAGE,
    )
    if (
        not line_item.is_vitals
        and status == AdministrationStatus.GIVEN
        and code.upper() == discontinued_code()
    ):
        result.cascade = cascade_discontinuation(line_item, day)
        result.warning = result.cascade.warning
        result.marks = result.cascade.marks
    else:
        result.marks = AdministrationMark.objects.day_map(line_item.pk)
    return result


def demote_administration(line_item_id, day) -> AdministrationResult:
    """双击手势：Given -> Not Given，保留缩写；生命体征行与非 Given 记录为空操作。"""
    line_item, day, marks = _load(line_item_id, day)
    existing = marks.get(day)
    if line_item.is_vitals or existing is None or existing.status != AdministrationStatus.GIVEN:
        return AdministrationResult(line_item_id=line_item.pk, day=day, marks=marks)
    return set_administration(line_item.pk, day, AdministrationStatus.NOT_GIVEN, existing.initials)


def record_vitals_value(line_item_id, day, value, clinician=None) -> AdministrationResult:
    line_item = get_line_item(line_item_id)
    if not line_item.is_vitals:
        raise ValidationError("Line item is not a vital signs entry.")
    value = (value or "").strip()
    if not value:
        day = validate_day(day)
        return AdministrationResult(
            line_item_id=line_item.pk,
            day=day,
            marks=AdministrationMark.objects.day_map(line_item.pk),
        )
    return set_administration(line_item.pk, day, AdministrationStatus.GIVEN, value, clinician=clinician)


def update_administration_note(line_item_id, day, note) -> AdministrationResult:
    """为已有记录设置备注；空白备注视为清除。没有记录的日期不允许写备注。"""
    line_item, day, marks = _load(line_item_id, day)
    mark = marks.get(day)
    if mark is None:
        raise ValidationError("Record an administration for this day before adding a note.")

    mark.notes = (note or "").strip()
    mark.save(update_fields=["notes", "updated_at"])
    logger.info("给药备注已更新 line_item=%s day=%s", line_item.pk, day)
    return AdministrationResult(
        line_item_id=line_item.pk,
        day=day,
        saved=True,
        mark=mark,
        marks=AdministrationMark.objects.day_map(line_item.pk),
        message=NOTE_SAVED_MESSAGE,
    )


def cell_state(mark: Optional[AdministrationMark], active: bool, origin_day: Optional[int]) -> str:
    if not active:
        return CellState.INACTIVE
    if origin_day is not None:
        return CellState.DISCONTINUED
    if mark is None:
        return CellState.UNSET
    if mark.status == AdministrationStatus.NOT_GIVEN:
        return CellState.NOT_GIVEN
    if mark.status == AdministrationStatus.PRN:
        return CellState.PRN
    return CellState.GIVEN
