from django.apps import AppConfig


class MarConfig(AppConfig):
    """
    【业务说明】MAR（给药记录单）网格引擎：表单、用药行、每日给药记录、PRN 与生命体征。
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'mar'
    verbose_name = 'Medication Administration Records'
