from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from users.models.base import TimeStampedModel

from . import choices

# 数值型字段；bowel_movement 为文本字段单独处理
NUMERIC_VITAL_FIELDS = (
    "temperature",
    "pulse",
    "respiration",
    "weight",
    "systolic_bp",
    "diastolic_bp",
)
TEXT_VITAL_FIELDS = ("bowel_movement",)


class VitalSignsReading(TimeStampedModel):
    """表单级的每日生命体征读数，每个字段可独立为空。"""

    form = models.ForeignKey(
        "mar.MarForm",
        on_delete=models.CASCADE,
        related_name="vital_signs",
        verbose_name="MAR form",
    )
    day = models.PositiveSmallIntegerField(
        "Day of month",
        validators=[MinValueValidator(1), MaxValueValidator(choices.MAX_DAY)],
    )
    temperature = models.DecimalField("Temperature", max_digits=5, decimal_places=1, null=True, blank=True)
    pulse = models.PositiveSmallIntegerField("Pulse", null=True, blank=True)
    respiration = models.PositiveSmallIntegerField("Respiration", null=True, blank=True)
    weight = models.DecimalField("Weight", max_digits=6, decimal_places=1, null=True, blank=True)
    systolic_bp = models.PositiveSmallIntegerField("Systolic BP", null=True, blank=True)
    diastolic_bp = models.PositiveSmallIntegerField("Diastolic BP", null=True, blank=True)
    bowel_movement = models.CharField("Bowel movement", max_length=50, null=True, blank=True)

    class Meta:
        db_table = "mar_vital_signs"
        verbose_name = "Vital signs reading"
        verbose_name_plural = "Vital signs readings"
        constraints = [
            models.UniqueConstraint(fields=["form", "day"], name="uniq_mar_vitals_form_day"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.form_id}@{self.day}"
