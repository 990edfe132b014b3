from django.db import models

from users.models.base import TimeStampedModel

from . import choices


class LineItemQuerySet(models.QuerySet):
    def for_form(self, form_id):
        return self.filter(form_id=form_id)

    def medications(self):
        return self.filter(kind=choices.LineItemKind.MEDICATION)

    def vitals(self):
        return self.filter(kind=choices.LineItemKind.VITALS)


class LineItem(TimeStampedModel):
    """
    【业务说明】MAR 网格中的一行：一条用药（每个给药时间点一行）或一条生命体征行。
    【用法】kind 字段显式区分用药与体征；体征行的 dosage 字段存放测量说明。
    """

    form = models.ForeignKey(
        "mar.MarForm",
        on_delete=models.CASCADE,
        related_name="line_items",
        verbose_name="MAR form",
    )
    kind = models.CharField(
        "Kind",
        max_length=20,
        choices=choices.LineItemKind.choices,
        default=choices.LineItemKind.MEDICATION,
    )
    name = models.CharField("Name", max_length=255)
    dosage = models.TextField("Dosage / instructions", blank=True)
    route = models.CharField("Route", max_length=100, blank=True)
    start_date = models.DateField("Start date")
    stop_date = models.DateField("Stop date", null=True, blank=True)
    hour = models.TimeField("Hour", null=True, blank=True)
    notes = models.TextField("Notes", blank=True)
    parameter = models.TextField(
        "Parameter",
        blank=True,
        help_text="监测阈值说明，例如 “Hold if SBP < 100”。",
    )
    display_order = models.IntegerField(
        "Display order",
        null=True,
        blank=True,
        help_text="稀疏排序键，初始按 10 递增，便于在两行之间插入。",
    )
    frequency = models.PositiveSmallIntegerField("Times per day", default=1)
    frequency_display = models.CharField("Frequency label", max_length=100, blank=True)

    objects = LineItemQuerySet.as_manager()

    class Meta:
        db_table = "mar_line_items"
        verbose_name = "Line item"
        verbose_name_plural = "Line items"
        indexes = [
            models.Index(fields=["form", "display_order"], name="idx_mar_item_form_order"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.name} ({self.get_kind_display()})"

    @property
    def is_vitals(self) -> bool:
        return self.kind == choices.LineItemKind.VITALS

    @property
    def frequency_label(self) -> str:
        if self.is_vitals:
            return ""
        if self.frequency_display:
            return self.frequency_display
        count = self.frequency or 1
        return f"{count} time{'s' if count > 1 else ''} per day"

    @property
    def group_key(self) -> str:
        """同名、同剂量、同起止日期的用药行属于同一组（网格中合并药名单元格）。"""
        if self.is_vitals:
            return f"vitals_{self.pk}"
        return "|".join(
            [
                self.name,
                self.dosage,
                self.start_date.isoformat() if self.start_date else "",
                self.stop_date.isoformat() if self.stop_date else "",
            ]
        )
