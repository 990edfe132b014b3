"""MAR 编辑器的自定义后台站点配置。"""

from django.conf import settings
from django.contrib.admin import AdminSite
from django.contrib.admin.apps import AdminConfig


class MarEditorAdminSite(AdminSite):
    site_header = "MAR Editor Administration"
    site_title = "MAR Editor"
    index_title = "Administration"

    def get_app_list(self, request, app_label=None):
        app_dict = self._build_app_dict(request, app_label)
        ordered_list = []
        preferred_order = getattr(settings, "ADMIN_APP_ORDER", [])

        for label in preferred_order:
            app_config = app_dict.pop(label, None)
            if app_config:
                ordered_list.append(app_config)

        # 其余应用按名称字母序追加，保持体验一致。
        ordered_list.extend(sorted(app_dict.values(), key=lambda app: app["name"].lower()))
        return ordered_list


class MarEditorAdminConfig(AdminConfig):
    default_site = "mar_editor.admin_site.MarEditorAdminSite"
