from django.conf import settings
from django.db import models

from users.models.base import TimeStampedModel


class CustomLegend(TimeStampedModel):
    """护理人员自定义的图例代码（如 “ABC = Absent from Care”），跨表单复用。"""

    clinician = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="mar_custom_legends",
        verbose_name="Clinician",
    )
    code = models.CharField("Code", max_length=10)
    description = models.TextField("Description")

    class Meta:
        db_table = "mar_custom_legends"
        verbose_name = "Custom legend"
        verbose_name_plural = "Custom legends"
        ordering = ("code",)
        constraints = [
            models.UniqueConstraint(fields=["clinician", "code"], name="uniq_mar_legend_clinician_code"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code} = {self.description}"
