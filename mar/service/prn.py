"""
PRN（按需给药）记录服务。

字段填写顺序约束：
- initials 需要 hour 与 result 均已填写；
- staff_signature 需要 initials 已填写。

写入 initials 时，若签名图例（由历史 PRN 记录的 initials -> staff_signature 构成）中
存在该缩写，则自动带出 staff_signature。
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from mar.models import MarForm, PRNRecord
from mar.utils import parse_date, parse_time

logger = logging.getLogger(__name__)

PRN_FIELD_PREREQUISITES: Dict[str, tuple] = {
    "initials": ("hour", "result"),
    "staff_signature": ("initials",),
}

EDITABLE_FIELDS = ("hour", "result", "initials", "staff_signature", "reason", "note")

FIELD_LABELS = {
    "hour": "Time",
    "result": "Result",
    "initials": "Initials",
    "staff_signature": "Staff Signature",
    "reason": "Reason",
    "note": "Note",
}


def _is_blank(value) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _join_labels(labels) -> str:
    labels = list(labels)
    if len(labels) <= 1:
        return "".join(labels)
    return ", ".join(labels[:-1]) + " and " + labels[-1]


def missing_prerequisites(values, field: str) -> list:
    """返回 field 尚未满足的前置字段名；values 可以是 PRNRecord 或 dict。"""
    getter = values.get if isinstance(values, dict) else (lambda name: getattr(values, name, None))
    return [name for name in PRN_FIELD_PREREQUISITES.get(field, ()) if _is_blank(getter(name))]


def validate_prn_field_edit(record, field: str) -> None:
    """
    【功能说明】
    - 校验 PRN 记录某一字段当前是否允许填写；不满足时抛出 ValidationError，
      消息中列出缺失的前置字段，例如 “Time and Result must be filled before setting Initials”。
    """

    if field not in EDITABLE_FIELDS:
        raise ValidationError(f"Field {field!r} cannot be edited on a PRN record.")
    missing = missing_prerequisites(record, field)
    if missing:
        raise ValidationError(
            f"{_join_labels(FIELD_LABELS[name] for name in missing)} must be filled "
            f"before setting {FIELD_LABELS[field]}"
        )


def build_signature_legend(records: Iterable[PRNRecord]) -> Dict[str, str]:
    """initials -> staff_signature，后出现的记录覆盖先出现的。"""
    legend: Dict[str, str] = {}
    for record in records:
        if record.initials and record.staff_signature:
            legend[record.initials.strip().upper()] = record.staff_signature
    return legend


def _get_record(record_id) -> PRNRecord:
    try:
        return PRNRecord.objects.get(pk=record_id)
    except (PRNRecord.DoesNotExist, ValueError, TypeError) as exc:
        raise ValidationError("PRN record not found.") from exc


def _clean_value(field: str, value):
    if _is_blank(value):
        return None
    if field == "hour":
        return parse_time(value)
    value = str(value).strip()
    if field == "initials":
        return value.upper()
    return value


def _form_legend(form_id) -> Dict[str, str]:
    return build_signature_legend(PRNRecord.objects.filter(form_id=form_id).order_by("entry_number", "id"))


def update_prn_field(record_id, field: str, value) -> PRNRecord:
    """
    【功能说明】
    - 更新 PRN 记录的单个字段。空白值保存为 NULL。

    【业务规则】
    - 写入非空 initials / staff_signature 前校验前置字段；清空字段不受约束；
    - 写入 initials 时从签名图例自动带出 staff_signature。

    【返回值说明】
    - 更新后的 PRNRecord。
    """

    if field not in EDITABLE_FIELDS:
        raise ValidationError(f"Field {field!r} cannot be edited on a PRN record.")
    record = _get_record(record_id)
    cleaned = _clean_value(field, value)
    if field == "reason" and cleaned is None:
        raise ValidationError("Reason is required.")
    if cleaned is not None:
        validate_prn_field_edit(record, field)

    setattr(record, field, cleaned)
    update_fields = [field, "updated_at"]
    if field == "initials" and cleaned:
        signature = _form_legend(record.form_id).get(cleaned)
        if signature:
            record.staff_signature = signature
            update_fields.append("staff_signature")

    record.save(update_fields=update_fields)
    logger.info("PRN 记录已更新 record=%s field=%s", record.pk, field)
    return record


@transaction.atomic
def add_prn_record(
    form_id,
    date,
    medication: str,
    reason: str,
    hour=None,
    result: Optional[str] = None,
    initials: Optional[str] = None,
    staff_signature: Optional[str] = None,
    note: Optional[str] = None,
) -> PRNRecord:
    """
    【功能说明】
    - 新增一条 PRN 记录，entry_number = 表单现有记录数 + 1（删除后不重新编号）。
    - date、medication、reason 必填；初始值同样遵守字段填写顺序约束。
    """

    try:
        form = MarForm.objects.get(pk=form_id)
    except (MarForm.DoesNotExist, ValueError, TypeError) as exc:
        raise ValidationError("MAR form not found.") from exc

    values = {
        "date": parse_date(date),
        "medication": (medication or "").strip(),
        "reason": (reason or "").strip(),
        "hour": _clean_value("hour", hour),
        "result": _clean_value("result", result),
        "initials": _clean_value("initials", initials),
        "staff_signature": _clean_value("staff_signature", staff_signature),
        "note": _clean_value("note", note),
    }
    if values["date"] is None or not values["medication"] or not values["reason"]:
        raise ValidationError("Date, medication and reason are required for a PRN record.")
    for field in PRN_FIELD_PREREQUISITES:
        if values[field] is not None:
            validate_prn_field_edit(values, field)

    if values["initials"] and not values["staff_signature"]:
        values["staff_signature"] = _form_legend(form.pk).get(values["initials"])

    record = PRNRecord.objects.create(
        form=form,
        entry_number=PRNRecord.objects.filter(form=form).count() + 1,
        **values,
    )
    logger.info("PRN 记录已新增 form=%s entry=%s", form.pk, record.entry_number)
    return record


def delete_prn_record(record_id) -> None:
    record = _get_record(record_id)
    record.delete()
    logger.info("PRN 记录已删除 record=%s form=%s", record_id, record.form_id)
