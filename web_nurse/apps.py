from django.apps import AppConfig


class WebNurseConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "web_nurse"
    verbose_name = "Nurse MAR workspace"
