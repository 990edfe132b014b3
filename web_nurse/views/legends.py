"""图例（单元格代码）接口：内置代码 + 当前护士的自定义代码。"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_http_methods, require_POST

from mar.models import CustomLegend
from mar.service.legend import delete_custom_legend, legend_options, list_custom_legends, save_custom_legend
from web_nurse.decorators import nurse_json_required
from web_nurse.views.common import _json_error, _json_ok, read_payload, service_json_view


def _serialize_legend(legend: CustomLegend) -> dict:
    return {"id": legend.pk, "code": legend.code, "description": legend.description}


@require_http_methods(["GET", "POST"])
@nurse_json_required
@service_json_view
def legends(request: HttpRequest) -> JsonResponse:
    """GET 返回可选代码与自定义图例；POST 新建或修改（携带 id 时为修改）。"""
    if request.method == "GET":
        return _json_ok(
            options=legend_options(request.user),
            custom=[_serialize_legend(legend) for legend in list_custom_legends(request.user)],
        )

    payload = read_payload(request)
    legend_id = payload.get("id") or None
    legend = save_custom_legend(
        request.user,
        payload.get("code", ""),
        payload.get("description", ""),
        legend_id=legend_id,
    )
    return _json_ok(
        "Legend saved.",
        status=200 if legend_id else 201,
        legend=_serialize_legend(legend),
        options=legend_options(request.user),
    )


@require_POST
@nurse_json_required
@service_json_view
def legend_delete(request: HttpRequest, legend_id: int) -> JsonResponse:
    if not CustomLegend.objects.filter(pk=legend_id, clinician=request.user).exists():
        return _json_error("Custom legend not found.", status=404)
    delete_custom_legend(request.user, legend_id)
    return _json_ok("Legend deleted.", options=legend_options(request.user))
