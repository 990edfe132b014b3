"""用药行与生命体征行的新增、排序、编辑与删除接口。"""

from django.core.exceptions import ValidationError
from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_POST

from mar.models import LineItem, MarForm, choices
from mar.service.display_order import apply_order, move_line_item, move_line_item_step
from mar.service.line_item import (
    add_medication,
    add_vitals,
    delete_line_item,
    update_hour,
    update_parameter,
)
from web_nurse.decorators import nurse_json_required
from web_nurse.views.common import _json_error, _json_ok, payload_list, read_payload, service_json_view
from web_nurse.views.serializers import serialize_line_item

LINE_ITEM_NOT_FOUND = "Line item not found."


@require_POST
@nurse_json_required
@service_json_view
def line_item_add(request: HttpRequest, form_id: int) -> JsonResponse:
    """
    【功能说明】
    - kind=vitals 时新增生命体征行，否则新增用药（frequency>1 时一次生成多行）。
    - target_id + position(above/below) 指定插入位置；缺省时用药在最下方、体征在最上方。
    """

    if not MarForm.objects.filter(pk=form_id).exists():
        return _json_error("MAR form not found.", status=404)

    payload = read_payload(request)
    placement = {
        "target_id": payload.get("target_id") or None,
        "position": payload.get("position") or None,
    }
    if payload.get("kind") == choices.LineItemKind.VITALS:
        result = add_vitals(
            form_id,
            instructions=payload.get("instructions") or payload.get("dosage", ""),
            start_date=payload.get("start_date"),
            stop_date=payload.get("stop_date") or None,
            initials=payload.get("initials", ""),
            clinician=request.user,
            **placement,
        )
    else:
        result = add_medication(
            form_id,
            name=payload.get("name", ""),
            dosage=payload.get("dosage", ""),
            start_date=payload.get("start_date"),
            stop_date=payload.get("stop_date") or None,
            hour=payload.get("hour") or None,
            times=payload_list(payload, "times"),
            frequency=payload.get("frequency") or 1,
            frequency_display=payload.get("frequency_display", ""),
            route=payload.get("route", ""),
            notes=payload.get("notes", ""),
            initials=payload.get("initials", ""),
            clinician=request.user,
            **placement,
        )
    return _json_ok(
        result.message,
        warning=result.warning,
        status=201,
        items=[serialize_line_item(item) for item in result.items],
    )


@require_POST
@nurse_json_required
@service_json_view
def line_item_order(request: HttpRequest, form_id: int) -> JsonResponse:
    """拖拽排序后提交整张表单的行顺序，服务端按 10, 20, 30... 重新编号。"""
    if not MarForm.objects.filter(pk=form_id).exists():
        return _json_error("MAR form not found.", status=404)
    payload = read_payload(request)
    items = apply_order(form_id, payload_list(payload, "ordered_ids") or [])
    return _json_ok("Order saved.", items=[serialize_line_item(item) for item in items])


@require_POST
@nurse_json_required
@service_json_view
def line_item_move(request: HttpRequest, line_item_id: int) -> JsonResponse:
    item = LineItem.objects.filter(pk=line_item_id).only("id", "form_id").first()
    if item is None:
        return _json_error(LINE_ITEM_NOT_FOUND, status=404)

    payload = read_payload(request)
    direction = payload.get("direction")
    if direction:
        items = move_line_item_step(item.pk, direction)
    else:
        try:
            index = int(payload.get("index"))
        except (TypeError, ValueError) as exc:
            raise ValidationError("Provide a direction or a target index.") from exc
        items = move_line_item(item.form_id, item.pk, index)
    return _json_ok("Order saved.", items=[serialize_line_item(row) for row in items])


@require_POST
@nurse_json_required
@service_json_view
def line_item_update(request: HttpRequest, line_item_id: int) -> JsonResponse:
    if not LineItem.objects.filter(pk=line_item_id).exists():
        return _json_error(LINE_ITEM_NOT_FOUND, status=404)

    payload = read_payload(request)
    field = payload.get("field")
    if field == "hour":
        item = update_hour(line_item_id, payload.get("value"))
    elif field == "parameter":
        item = update_parameter(line_item_id, payload.get("value"))
    else:
        return _json_error(f"Field {field!r} cannot be edited here.", status=400)
    return _json_ok("Line item updated.", item=serialize_line_item(item))


@require_POST
@nurse_json_required
@service_json_view
def line_item_delete(request: HttpRequest, line_item_id: int) -> JsonResponse:
    if not LineItem.objects.filter(pk=line_item_id).exists():
        return _json_error(LINE_ITEM_NOT_FOUND, status=404)
    deleted_marks = delete_line_item(line_item_id)
    return _json_ok("Line item deleted.", deleted_marks=deleted_marks)
