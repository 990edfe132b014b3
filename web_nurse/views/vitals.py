from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_POST

from mar.models import MarForm
from mar.service.vital_signs import update_vital_sign
from web_nurse.decorators import nurse_json_required
from web_nurse.views.common import _json_error, _json_ok, read_payload, service_json_view
from web_nurse.views.serializers import serialize_vital_reading


@require_POST
@nurse_json_required
@service_json_view
def vital_sign_update(request: HttpRequest, form_id: int, day: int) -> JsonResponse:
    if not MarForm.objects.filter(pk=form_id).exists():
        return _json_error("MAR form not found.", status=404)
    payload = read_payload(request)
    reading = update_vital_sign(form_id, day, payload.get("field", ""), payload.get("value"))
    return _json_ok("Vital signs updated.", reading=serialize_vital_reading(reading))
