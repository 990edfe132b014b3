"""单元格接口：设置给药状态、双击降级为 Not Given、单元格备注。"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_POST

from mar.models import LineItem, choices
from mar.service.administration import (
    AdministrationResult,
    demote_administration,
    record_vitals_value,
    set_administration,
    update_administration_note,
)
from web_nurse.decorators import nurse_json_required
from web_nurse.views.common import _json_error, _json_ok, read_payload, service_json_view
from web_nurse.views.serializers import serialize_mark, serialize_marks

LINE_ITEM_NOT_FOUND = "Line item not found."


def _line_item_or_none(line_item_id: int):
    return LineItem.objects.filter(pk=line_item_id).only("id", "kind").first()


def _result_response(result: AdministrationResult) -> JsonResponse:
    return _json_ok(
        result.message,
        warning=result.warning,
        saved=result.saved,
        line_item_id=result.line_item_id,
        day=result.day,
        mark=serialize_mark(result.mark),
        marks=serialize_marks(result.marks),
    )


@require_POST
@nurse_json_required
@service_json_view
def administration_set(request: HttpRequest, line_item_id: int, day: int) -> JsonResponse:
    """
    【功能说明】
    - 用药行：按 status（缺省 Given）与 initials 写入单元格；选择停用代码时触发级联。
    - 生命体征行：value（或 initials）原样保存为测量值。
    """

    item = _line_item_or_none(line_item_id)
    if item is None:
        return _json_error(LINE_ITEM_NOT_FOUND, status=404)

    payload = read_payload(request)
    if item.is_vitals:
        value = payload.get("value") or payload.get("initials", "")
        result = record_vitals_value(item.pk, day, value, clinician=request.user)
    else:
        result = set_administration(
            item.pk,
            day,
            payload.get("status") or choices.AdministrationStatus.GIVEN,
            payload.get("initials", ""),
            clinician=request.user,
        )
    return _result_response(result)


@require_POST
@nurse_json_required
@service_json_view
def administration_demote(request: HttpRequest, line_item_id: int, day: int) -> JsonResponse:
    if _line_item_or_none(line_item_id) is None:
        return _json_error(LINE_ITEM_NOT_FOUND, status=404)
    return _result_response(demote_administration(line_item_id, day))


@require_POST
@nurse_json_required
@service_json_view
def administration_note(request: HttpRequest, line_item_id: int, day: int) -> JsonResponse:
    if _line_item_or_none(line_item_id) is None:
        return _json_error(LINE_ITEM_NOT_FOUND, status=404)
    payload = read_payload(request)
    return _result_response(update_administration_note(line_item_id, day, payload.get("note", "")))
