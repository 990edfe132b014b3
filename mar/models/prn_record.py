from django.db import models

from users.models.base import TimeStampedModel


class PRNRecord(TimeStampedModel):
    """
    【业务说明】按需（PRN）给药记录，挂在表单下而不是某一用药行下。
    【用法】entry_number 在创建时取 “已有条数 + 1”，删除后不重新编号。
    """

    form = models.ForeignKey(
        "mar.MarForm",
        on_delete=models.CASCADE,
        related_name="prn_records",
        verbose_name="MAR form",
    )
    date = models.DateField("Date")
    hour = models.TimeField("Hour", null=True, blank=True)
    initials = models.CharField("Initials", max_length=50, null=True, blank=True)
    medication = models.CharField("Medication", max_length=255)
    reason = models.TextField("Reason")
    result = models.TextField("Result", null=True, blank=True)
    staff_signature = models.TextField("Staff signature", null=True, blank=True)
    note = models.TextField("Note", null=True, blank=True)
    entry_number = models.PositiveIntegerField("Entry number", null=True, blank=True)

    class Meta:
        db_table = "mar_prn_records"
        verbose_name = "PRN record"
        verbose_name_plural = "PRN records"
        ordering = ("entry_number", "id")

    def __str__(self) -> str:  # pragma: no cover
        return f"#{self.entry_number} {self.medication} ({self.date})"
