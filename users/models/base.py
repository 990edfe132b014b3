from django.db import models


class TimeStampedModel(models.Model):
    """
    【业务说明】MAR 表单、用药行、给药记录等实体都需要记录创建与更新时间，便于护理审计。
    【用法】继承该抽象类后自动拥有 `created_at` 和 `updated_at` 字段。
    【参数】无额外参数。
    【返回值】作为抽象基类不直接实例化，仅提供字段。
    """

    created_at = models.DateTimeField("Created at", auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField("Updated at", auto_now=True)

    class Meta:
        abstract = True
