"""表单级每日生命体征读数。"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from django.core.exceptions import ValidationError

from mar.models import VitalSignsReading
from mar.models.vital_signs import NUMERIC_VITAL_FIELDS, TEXT_VITAL_FIELDS
from mar.service.mar_form import get_form
from mar.utils import validate_day

logger = logging.getLogger(__name__)

DECIMAL_VITAL_FIELDS = ("temperature", "weight")


def _parse_numeric(field: str, value):
    """空值或 0 返回 None（表示清空）；非法数值抛出 ValidationError。"""
    if value is None:
        return None
    raw = str(value).strip()
    if not raw:
        return None
    try:
        number = Decimal(raw)
    except InvalidOperation as exc:
        raise ValidationError(f"{field.replace('_', ' ').capitalize()} must be a number.") from exc
    if not number.is_finite() or number < 0:
        raise ValidationError(f"{field.replace('_', ' ').capitalize()} must be a positive number.")
    if number == 0:
        return None
    if field in DECIMAL_VITAL_FIELDS:
        return number.quantize(Decimal("0.1"))
    if number != number.to_integral_value():
        raise ValidationError(f"{field.replace('_', ' ').capitalize()} must be a whole number.")
    return int(number)


def update_vital_sign(form_id, day, field: str, value) -> Optional[VitalSignsReading]:
    """
    【功能说明】
    - 更新某一天的单个生命体征字段。

    【业务规则】
    - 数值字段：空值或 0 视为清空；
    - bowel_movement：文本原样保存（去除首尾空白），空值清空；
    - 清空操作不会为了写入 NULL 而新建当天记录。

    【返回值说明】
    - 更新后的 VitalSignsReading；当天无记录且为清空操作时返回 None。
    """

    if field not in NUMERIC_VITAL_FIELDS + TEXT_VITAL_FIELDS:
        raise ValidationError(f"Unknown vital sign field: {field!r}.")
    day = validate_day(day)
    form = get_form(form_id)

    if field in TEXT_VITAL_FIELDS:
        cleaned = (value or "").strip() or None
    else:
        cleaned = _parse_numeric(field, value)

    reading = VitalSignsReading.objects.filter(form=form, day=day).first()
    if reading is None:
        if cleaned is None:
            return None
        reading = VitalSignsReading.objects.create(form=form, day=day, **{field: cleaned})
    else:
        setattr(reading, field, cleaned)
        reading.save(update_fields=[field, "updated_at"])

    logger.info("生命体征已更新 form=%s day=%s field=%s", form.pk, day, field)
    return reading
