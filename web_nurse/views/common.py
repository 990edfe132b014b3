"""
护理端 JSON 接口的公共工具：请求体解析、统一的成功/失败响应、服务层异常转换。

【约定】
- 成功：{"success": true, "message": ..., "warning": ..., "message_dismiss_after_ms": ...}
- 失败：{"success": false, "message": ..., "dismiss_after_ms": ...}
- 服务层 ValidationError -> 400；DatabaseError -> 500（记录异常堆栈，提示可自动消失）。
"""

import json
import logging
from functools import wraps
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpRequest, JsonResponse

logger = logging.getLogger(__name__)

STORE_ERROR_MESSAGE = "Could not save your change. Please try again."


def _json_error(message: str, *, status: int) -> JsonResponse:
    return JsonResponse(
        {
            "success": False,
            "message": message,
            "dismiss_after_ms": settings.MAR_ERROR_TIMEOUT_MS,
        },
        status=status,
    )


def _json_ok(message: str = "", *, warning: str = "", status: int = 200, **data) -> JsonResponse:
    payload = {
        "success": True,
        "message": message,
        "warning": warning,
        "message_dismiss_after_ms": settings.MAR_MESSAGE_TIMEOUT_MS,
    }
    payload.update(data)
    return JsonResponse(payload, status=status)


def _validation_message(exc: ValidationError) -> str:
    return " ".join(exc.messages)


def service_json_view(view_func):
    """把服务层异常转换为 JSON 错误响应。"""

    @wraps(view_func)
    def _wrapped(request: HttpRequest, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except ValidationError as exc:
            return _json_error(_validation_message(exc), status=400)
        except DatabaseError:
            logger.exception("MAR 写入失败 view=%s kwargs=%s", view_func.__name__, kwargs)
            return _json_error(STORE_ERROR_MESSAGE, status=500)

    return _wrapped


def read_payload(request: HttpRequest) -> Dict[str, Any]:
    """
    【功能说明】
    - 读取 POST 请求体：application/json 按 JSON 解析，其余按表单解析。
    - 表单中同名多值的字段（如 times）返回列表，单值返回字符串。
    """

    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except (TypeError, ValueError) as exc:
            raise ValidationError("Invalid JSON body.") from exc
        if not isinstance(data, dict):
            raise ValidationError("Invalid JSON body.")
        return data
    return {key: values if len(values) > 1 else values[0] for key, values in request.POST.lists()}


def payload_list(payload: Dict[str, Any], name: str) -> Optional[List]:
    value = payload.get(name)
    if value is None or value == "":
        return None
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def payload_bool(payload: Dict[str, Any], name: str) -> bool:
    value = payload.get(name)
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in ("1", "true", "yes", "on")
