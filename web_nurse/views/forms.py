"""表单级接口：网格读取、开始新表单、表头与备注维护。"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET, require_POST

from mar.models import MarForm
from mar.service.grid import build_grid
from mar.service.mar_form import start_form, update_comments, update_form_header
from users.models import Patient
from web_nurse.decorators import nurse_json_required
from web_nurse.views.common import (
    _json_error,
    _json_ok,
    payload_bool,
    read_payload,
    service_json_view,
)
from web_nurse.views.serializers import serialize_form, serialize_grid


FORM_NOT_FOUND = "MAR form not found."


def _form_exists(form_id: int) -> bool:
    return MarForm.objects.filter(pk=form_id).exists()


@require_GET
@nurse_json_required
@service_json_view
def form_grid(request: HttpRequest, form_id: int) -> JsonResponse:
    if not _form_exists(form_id):
        return _json_error(FORM_NOT_FOUND, status=404)
    return _json_ok(grid=serialize_grid(build_grid(form_id)))


@require_POST
@nurse_json_required
@service_json_view
def form_start(request: HttpRequest) -> JsonResponse:
    """
    【功能说明】
    - 为患者开始一个月份的新表单。
    - 同月已有表单且未确认时返回 409，附带已有表单供前端询问用户。
    """

    payload = read_payload(request)
    try:
        patient_id = int(payload.get("patient_id"))
    except (TypeError, ValueError):
        return _json_error("patient_id is required.", status=400)
    if not Patient.objects.filter(pk=patient_id).exists():
        return _json_error("Patient not found.", status=404)

    result = start_form(
        patient_id,
        month_year=payload.get("month_year"),
        created_by=request.user,
        confirm_duplicate=payload_bool(payload, "confirm_duplicate"),
    )
    if result.needs_confirmation:
        return JsonResponse(
            {
                "success": False,
                "needs_confirmation": True,
                "message": (
                    f"A form for {result.existing.month_year} already exists. "
                    "Start another one anyway?"
                ),
                "existing": serialize_form(result.existing),
            },
            status=409,
        )
    return _json_ok("MAR form started.", status=201, form=serialize_form(result.form))


@require_POST
@nurse_json_required
@service_json_view
def form_comments(request: HttpRequest, form_id: int) -> JsonResponse:
    if not _form_exists(form_id):
        return _json_error(FORM_NOT_FOUND, status=404)
    payload = read_payload(request)
    form = update_comments(form_id, payload.get("comments", ""))
    return _json_ok("Comments saved.", form=serialize_form(form))


@require_POST
@nurse_json_required
@service_json_view
def form_header(request: HttpRequest, form_id: int) -> JsonResponse:
    if not _form_exists(form_id):
        return _json_error(FORM_NOT_FOUND, status=404)
    payload = read_payload(request)
    payload.pop("csrfmiddlewaretoken", None)
    form = update_form_header(form_id, **payload)
    return _json_ok("Form header updated.", form=serialize_form(form))
