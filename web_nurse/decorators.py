"""
【业务说明】护理端 JSON 接口的登录校验。
【用法】`@nurse_json_required` 作用于函数视图；未登录返回 401 JSON，而不是跳转登录页。
【规范】账号停用与未登录同样处理，前端统一提示重新登录。
"""

from functools import wraps
from typing import Callable

from django.http import HttpRequest, HttpResponse, JsonResponse

ViewFunc = Callable[..., HttpResponse]


def nurse_json_required(view_func: ViewFunc) -> ViewFunc:
    @wraps(view_func)
    def _wrapped(request: HttpRequest, *args, **kwargs):
        user = getattr(request, "user", None)
        if not getattr(user, "is_authenticated", False) or not getattr(user, "is_active", False):
            return JsonResponse({"success": False, "message": "Login required."}, status=401)
        return view_func(request, *args, **kwargs)

    return _wrapped
