"""PRN（按需用药）记录接口。"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_POST

from mar.models import MarForm, PRNRecord
from mar.service.prn import add_prn_record, delete_prn_record, update_prn_field
from web_nurse.decorators import nurse_json_required
from web_nurse.views.common import _json_error, _json_ok, read_payload, service_json_view
from web_nurse.views.serializers import serialize_prn

PRN_NOT_FOUND = "PRN record not found."


@require_POST
@nurse_json_required
@service_json_view
def prn_add(request: HttpRequest, form_id: int) -> JsonResponse:
    if not MarForm.objects.filter(pk=form_id).exists():
        return _json_error("MAR form not found.", status=404)

    payload = read_payload(request)
    record = add_prn_record(
        form_id,
        payload.get("date"),
        payload.get("medication", ""),
        payload.get("reason", ""),
        hour=payload.get("hour") or None,
        result=payload.get("result") or None,
        initials=payload.get("initials") or None,
        staff_signature=payload.get("staff_signature") or None,
        note=payload.get("note") or None,
    )
    return _json_ok("PRN entry added.", status=201, record=serialize_prn(record))


@require_POST
@nurse_json_required
@service_json_view
def prn_update_field(request: HttpRequest, record_id: int) -> JsonResponse:
    """
    单字段编辑。字段顺序约束（Time/Result -> Initials -> Staff Signature）
    由服务层校验，违反时返回 400 与具体缺失字段。
    """
    if not PRNRecord.objects.filter(pk=record_id).exists():
        return _json_error(PRN_NOT_FOUND, status=404)

    payload = read_payload(request)
    record = update_prn_field(record_id, payload.get("field", ""), payload.get("value"))
    return _json_ok("PRN entry updated.", record=serialize_prn(record))


@require_POST
@nurse_json_required
@service_json_view
def prn_delete(request: HttpRequest, record_id: int) -> JsonResponse:
    if not PRNRecord.objects.filter(pk=record_id).exists():
        return _json_error(PRN_NOT_FOUND, status=404)
    delete_prn_record(record_id)
    return _json_ok("PRN entry deleted.")
