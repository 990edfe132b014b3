"""
图例代码：内置代码 + 护理人员自定义代码。

自定义代码归属于护理人员而非表单，跨表单复用；代码统一大写，同一护理人员下唯一。
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from mar.models import CustomLegend
from mar.service.discontinuation import discontinued_code
from users.services import resolve_default_initials

logger = logging.getLogger(__name__)

BUILTIN_LEGENDS = (
    ("NG", "Not Given"),
    ("PRN", "As Needed"),
    ("H", "Held"),
    ("R", "Refused"),
)

MAX_CODE_LENGTH = 10


def list_custom_legends(clinician):
    return CustomLegend.objects.filter(clinician=clinician).order_by("code")


def _clean_code(code) -> str:
    code = (code or "").strip().upper()
    if not code:
        raise ValidationError("Legend code is required.")
    if len(code) > MAX_CODE_LENGTH:
        raise ValidationError(f"Legend code must be at most {MAX_CODE_LENGTH} characters.")
    return code


def save_custom_legend(clinician, code: str, description: str, legend_id=None) -> CustomLegend:
    """
    【功能说明】
    - 新建或修改护理人员的自定义图例。legend_id 为空时新建。

    【返回值说明】
    - 保存后的 CustomLegend；代码重复时抛出 ValidationError。
    """

    code = _clean_code(code)
    description = (description or "").strip()
    if not description:
        raise ValidationError("Legend description is required.")

    if legend_id:
        legend = CustomLegend.objects.filter(pk=legend_id, clinician=clinician).first()
        if legend is None:
            raise ValidationError("Custom legend not found.")
    else:
        legend = CustomLegend(clinician=clinician)

    duplicate = CustomLegend.objects.filter(clinician=clinician, code=code)
    if legend.pk:
        duplicate = duplicate.exclude(pk=legend.pk)
    if duplicate.exists():
        raise ValidationError(f"Legend code {code} already exists.")

    legend.code = code
    legend.description = description
    try:
        with transaction.atomic():
            legend.save()
    except IntegrityError as exc:
        raise ValidationError(f"Legend code {code} already exists.") from exc
    logger.info("自定义图例已保存 clinician=%s code=%s", clinician.pk, code)
    return legend


def delete_custom_legend(clinician, legend_id) -> None:
    deleted, _ = CustomLegend.objects.filter(pk=legend_id, clinician=clinician).delete()
    if not deleted:
        raise ValidationError("Custom legend not found.")
    logger.info("自定义图例已删除 clinician=%s legend=%s", clinician.pk, legend_id)


def legend_options(clinician) -> List[Dict[str, Optional[str]]]:
    """
    单元格可选代码：护理人员本人缩写（如有）、内置代码、自定义代码，按此顺序并去重。
    """
    options: List[Dict[str, Optional[str]]] = []
    seen = set()

    def _add(code, description, source):
        if code and code not in seen:
            seen.add(code)
            options.append({"code": code, "description": description, "source": source})

    _add(resolve_default_initials(clinician), "My initials", "initials")
    _add(discontinued_code(), "Discontinued", "builtin")
    for code, description in BUILTIN_LEGENDS:
        _add(code, description, "builtin")
    if clinician is not None and clinician.pk:
        for legend in list_custom_legends(clinician):
            _add(legend.code, legend.description, "custom")
    return options
