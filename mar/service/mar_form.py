"""MAR 表单服务：建表、表头维护与整表状态加载（Fat Service, Thin Views）。"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from mar.models import AdministrationMark, LineItem, MarForm, PRNRecord, VitalSignsReading
from mar.service.display_order import sort_line_items
from mar.service.prn import build_signature_legend
from mar.utils import format_month_year, normalize_month_year, parse_date
from users.models import Patient

logger = logging.getLogger(__name__)

DEFAULT_ALLERGIES = "None"
DEFAULT_PHYSICIAN = "TBD"
DEFAULT_FACILITY = "N/A"

HEADER_FIELDS = (
    "patient_name",
    "record_number",
    "date_of_birth",
    "sex",
    "diagnosis",
    "diet",
    "allergies",
    "physician_name",
    "physician_phone",
    "facility_name",
    "vital_signs_instructions",
)


@dataclass
class StartFormResult:
    """created=False 且 existing 非空时，需要用户确认是否仍要新建。"""

    form: Optional[MarForm] = None
    created: bool = False
    existing: Optional[MarForm] = None

    @property
    def needs_confirmation(self) -> bool:
        return not self.created and self.existing is not None


@dataclass
class FormState:
    form: MarForm
    line_items: List[LineItem] = field(default_factory=list)
    marks: Dict[int, Dict[int, AdministrationMark]] = field(default_factory=dict)
    prn_records: List[PRNRecord] = field(default_factory=list)
    vital_signs: Dict[int, VitalSignsReading] = field(default_factory=dict)
    signature_legend: Dict[str, str] = field(default_factory=dict)


def get_form(form_id) -> MarForm:
    try:
        return MarForm.objects.select_related("patient").get(pk=form_id)
    except (MarForm.DoesNotExist, ValueError, TypeError) as exc:
        raise ValidationError("MAR form not found.") from exc


def list_forms(patient_id, month_year: Optional[str] = None):
    """按创建时间倒序列出患者的表单，可按报告月份过滤。"""
    queryset = MarForm.objects.for_patient(patient_id)
    if month_year:
        queryset = queryset.for_month(normalize_month_year(month_year))
    return queryset.order_by("-created_at", "-id")


@transaction.atomic
def start_form(
    patient_id,
    month_year: Optional[str] = None,
    created_by=None,
    confirm_duplicate: bool = False,
) -> StartFormResult:
    """
    【功能说明】
    - 为患者开始一个报告月份的 MAR 表单，表头字段从患者档案拷贝快照。
    - 同一患者同一月份已存在表单时，默认不新建，返回最近一份供用户确认；
      confirm_duplicate=True 时仍然新建。

    【参数说明】
    - patient_id: 患者 ID。
    - month_year: 报告月份，缺省为当前月份；接受 "2025-11"、"November 2025" 等写法。
    - created_by: 当前护士（CustomUser）。
    - confirm_duplicate: 用户已确认要重复建表。

    【返回值说明】
    - StartFormResult。
    """

    try:
        patient = Patient.objects.get(pk=patient_id)
    except (Patient.DoesNotExist, ValueError, TypeError) as exc:
        raise ValidationError("Patient not found.") from exc

    if month_year:
        month_year = normalize_month_year(month_year)
    else:
        today = timezone.localdate()
        month_year = format_month_year(today.year, today.month)

    existing = list_forms(patient.pk, month_year).first()
    if existing is not None and not confirm_duplicate:
        logger.info("表单已存在 patient=%s month=%s form=%s，等待确认", patient.pk, month_year, existing.pk)
        return StartFormResult(existing=existing)

    form = MarForm.objects.create(
        patient=patient,
        created_by=created_by,
        month_year=month_year,
        patient_name=patient.name,
        record_number=patient.record_number,
        date_of_birth=patient.date_of_birth,
        sex=patient.sex,
        diagnosis=patient.diagnosis,
        diet=patient.diet,
        allergies=patient.allergies or DEFAULT_ALLERGIES,
        physician_name=patient.physician_name or DEFAULT_PHYSICIAN,
        physician_phone=patient.physician_phone,
        facility_name=patient.facility_name or DEFAULT_FACILITY,
    )
    logger.info("表单已创建 patient=%s month=%s form=%s", patient.pk, month_year, form.pk)
    return StartFormResult(form=form, created=True, existing=existing)


def update_comments(form_id, comments: str) -> MarForm:
    form = get_form(form_id)
    form.comments = (comments or "").strip()
    form.save(update_fields=["comments", "updated_at"])
    return form


def update_form_header(form_id, **values) -> MarForm:
    """
    【功能说明】
    - 编辑表头（患者信息）字段，只更新传入的字段。

    【参数说明】
    - values: HEADER_FIELDS 中的任意字段；未知字段抛出 ValidationError。
    """

    unknown = set(values) - set(HEADER_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown header field(s): {', '.join(sorted(unknown))}.")

    form = get_form(form_id)
    for name, value in values.items():
        if name == "date_of_birth":
            value = parse_date(value)
        else:
            value = (value or "").strip()
        setattr(form, name, value)
    if values:
        form.save(update_fields=list(values) + ["updated_at"])
        logger.info("表头已更新 form=%s fields=%s", form.pk, sorted(values))
    return form


def load_form_state(form_id) -> FormState:
    """读取整张表单的权威状态；每次写操作之后由调用方重新请求。"""
    form = get_form(form_id)
    line_items = sort_line_items(LineItem.objects.for_form(form.pk).order_by("created_at", "id"))

    marks: Dict[int, Dict[int, AdministrationMark]] = {item.pk: {} for item in line_items}
    for mark in AdministrationMark.objects.for_line_items(marks.keys()).order_by("day"):
        marks[mark.line_item_id][mark.day] = mark

    prn_records = list(PRNRecord.objects.filter(form=form).order_by("entry_number", "id"))
    vital_signs = {reading.day: reading for reading in VitalSignsReading.objects.filter(form=form)}

    return FormState(
        form=form,
        line_items=line_items,
        marks=marks,
        prn_records=prn_records,
        vital_signs=vital_signs,
        signature_legend=build_signature_legend(prn_records),
    )
