"""
用药行 / 生命体征行的增删改。

新增用药时每个给药时间点生成一行（frequency=n -> n 行），顺序键连续；
新增生命体征行默认放在最上方。指定目标行与位置时，由 display_order 服务计算插入键。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from django.core.exceptions import ValidationError
from django.db import transaction

from mar.models import AdministrationMark, LineItem, choices
from mar.service import administration
from mar.service.active_window import is_active
from mar.service.display_order import keys_collide, next_insert_key, place_rows
from mar.service.mar_form import get_form
from mar.utils import parse_date, parse_month_year, parse_time

logger = logging.getLogger(__name__)

MAX_FREQUENCY = 12
VITALS_NAME = "Vital Signs"

LineItemKind = choices.LineItemKind


@dataclass
class AddLineItemResult:
    items: List[LineItem] = field(default_factory=list)
    message: str = ""
    warning: str = ""


def _validate_dates(start_date, stop_date):
    start = parse_date(start_date)
    stop = parse_date(stop_date)
    if start is None:
        raise ValidationError("Start date is required.")
    if stop is not None and stop < start:
        raise ValidationError("Stop date cannot be before start date.")
    return start, stop


def _dose_hours(frequency: int, hour, times: Optional[Sequence]) -> list:
    times = list(times or [])
    hours = []
    for index in range(frequency):
        raw = times[index] if index < len(times) and times[index] else hour
        parsed = parse_time(raw)
        if parsed is None:
            if frequency > 1:
                raise ValidationError("Please enter all administration times.")
            raise ValidationError("Please enter administration time.")
        hours.append(parsed)
    return hours


def _settle_order(form_id, items: List[LineItem], target_id, position) -> List[LineItem]:
    """相对插入的新行与相邻行顺序键重叠时，整组放到目标行旁并整表重排。"""
    if not (items and target_id and position):
        return items
    ids = [item.pk for item in items]
    first_key = items[0].display_order
    last_key = items[-1].display_order
    if not keys_collide(form_id, ids, first_key, last_key):
        return items
    logger.info("顺序键空隙不足 form=%s rows=%s，整表重排", form_id, len(ids))
    by_pk = {item.pk: item for item in place_rows(form_id, ids, target_id, position)}
    return [by_pk[pk] for pk in ids]


def _mark_start_day(items: List[LineItem], initials: str, clinician=None) -> str:
    """在开始日写入首个给药记录；开始日不在表单月份内时跳过。返回级联告警（如有）。"""
    if not items or not (initials or "").strip():
        return ""
    first = items[0]
    form_month = parse_month_year(first.form.month_year)
    start_day = first.start_date.day
    if (first.start_date.year, first.start_date.month) != form_month:
        return ""
    if not is_active(first, form_month, start_day):
        return ""

    warning = ""
    for item in items:
        if item.is_vitals:
            result = administration.record_vitals_value(item.pk, start_day, initials, clinician=clinician)
        else:
            result = administration.set_administration(
                item.pk,
                start_day,
                choices.AdministrationStatus.GIVEN,
                initials,
                clinician=clinician,
            )
        warning = warning or result.warning
    return warning


def add_medication(
    form_id,
    name: str,
    dosage: str,
    start_date,
    stop_date=None,
    hour=None,
    times: Optional[Sequence] = None,
    frequency: int = 1,
    frequency_display: str = "",
    route: str = "",
    notes: str = "",
    initials: str = "",
    target_id=None,
    position: Optional[str] = None,
    clinician=None,
) -> AddLineItemResult:
    """
    【功能说明】
    - 新增一条用药。frequency=n 时生成 n 行，第 i 行使用 times[i]（缺省回退到 hour），
      顺序键为 key, key+1, ..., key+n-1；与相邻行重叠时整组放到目标行旁并整表重排。
    - 提供 initials 时，在开始日为每一行写入 Given 记录。

    【参数说明】
    - target_id / position: 插入到某一行的上方（above）或下方（below）；缺省放到最下方。

    【返回值说明】
    - AddLineItemResult，items 为新建的行。
    """

    name = (name or "").strip()
    dosage = (dosage or "").strip()
    if not name or not dosage:
        raise ValidationError("Medication name and dosage are required.")
    start, stop = _validate_dates(start_date, stop_date)
    try:
        frequency = int(frequency or 1)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Frequency must be a number.") from exc
    if not 1 <= frequency <= MAX_FREQUENCY:
        raise ValidationError(f"Frequency must be between 1 and {MAX_FREQUENCY}.")
    hours = _dose_hours(frequency, hour, times)

    form = get_form(form_id)
    with transaction.atomic():
        key = next_insert_key(form.pk, LineItemKind.MEDICATION, target_id, position)
        items = [
            LineItem.objects.create(
                form=form,
                kind=LineItemKind.MEDICATION,
                name=name,
                dosage=dosage,
                route=(route or "").strip(),
                start_date=start,
                stop_date=stop,
                hour=dose_hour,
                notes=(notes or "").strip(),
                frequency=frequency,
                frequency_display=(frequency_display or "").strip(),
                display_order=key + index,
            )
            for index, dose_hour in enumerate(hours)
        ]
        items = _settle_order(form.pk, items, target_id, position)
    logger.info("用药已新增 form=%s name=%s rows=%s order=%s", form.pk, name, len(items), key)

    warning = _mark_start_day(items, initials, clinician)
    suffix = f" ({frequency} times per day)" if frequency > 1 else ""
    return AddLineItemResult(items=items, message=f"Medication added successfully{suffix}!", warning=warning)


def add_vitals(
    form_id,
    instructions: str,
    start_date,
    stop_date=None,
    initials: str = "",
    target_id=None,
    position: Optional[str] = None,
    clinician=None,
) -> AddLineItemResult:
    """新增生命体征行：说明文字存放在 dosage 字段，无给药时间；缺省放到最上方。"""
    instructions = (instructions or "").strip()
    if not instructions:
        raise ValidationError("Vital signs instructions are required.")
    start, stop = _validate_dates(start_date, stop_date)

    form = get_form(form_id)
    with transaction.atomic():
        key = next_insert_key(form.pk, LineItemKind.VITALS, target_id, position)
        item = LineItem.objects.create(
            form=form,
            kind=LineItemKind.VITALS,
            name=VITALS_NAME,
            dosage=instructions,
            start_date=start,
            stop_date=stop,
            hour=None,
            display_order=key,
        )
        item = _settle_order(form.pk, [item], target_id, position)[0]
    logger.info("生命体征行已新增 form=%s item=%s order=%s", form.pk, item.pk, key)

    warning = _mark_start_day([item], initials, clinician)
    return AddLineItemResult(items=[item], message="Vital signs entry added successfully!", warning=warning)


def update_hour(line_item_id, hour) -> LineItem:
    item = administration.get_line_item(line_item_id)
    if item.is_vitals:
        raise ValidationError("Vital signs entries have no administration time.")
    parsed = parse_time(hour)
    if parsed is None:
        raise ValidationError("Please enter administration time.")
    item.hour = parsed
    item.save(update_fields=["hour", "updated_at"])
    return item


def update_parameter(line_item_id, parameter) -> LineItem:
    item = administration.get_line_item(line_item_id)
    item.parameter = (parameter or "").strip()
    item.save(update_fields=["parameter", "updated_at"])
    logger.info("监测参数已更新 item=%s", item.pk)
    return item


@transaction.atomic
def delete_line_item(line_item_id) -> int:
    """删除一行及其全部给药记录；返回被删除的给药记录数。"""
    item = administration.get_line_item(line_item_id)
    deleted, _ = AdministrationMark.objects.for_line_item(item.pk).delete()
    item.delete()
    logger.info("用药行已删除 item=%s form=%s marks=%s", line_item_id, item.form_id, deleted)
    return deleted
