from django.conf import settings
from django.db import models

from users import choices as user_choices
from users.models.base import TimeStampedModel

from . import choices


class MarFormQuerySet(models.QuerySet):
    def for_patient(self, patient_id):
        return self.filter(patient_id=patient_id)

    def for_month(self, month_year: str):
        return self.filter(month_year=month_year)


class MarForm(TimeStampedModel):
    """
    【业务说明】一位患者一个报告月份的 MAR 表单。表头的人口学字段为建表时的快照。
    【约束】同一 (patient, month_year) 理论上只应有一份，但库层不做唯一约束，
            重复由前端确认后处理，不视为错误。
    """

    patient = models.ForeignKey(
        "users.Patient",
        on_delete=models.CASCADE,
        related_name="mar_forms",
        verbose_name="Patient",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_mar_forms",
        verbose_name="Created by",
    )
    month_year = models.CharField(
        "Month",
        max_length=7,
        db_index=True,
        help_text="规范化格式 YYYY-MM，例如 2025-11。",
    )
    status = models.CharField(
        "Status",
        max_length=20,
        choices=choices.FormStatus.choices,
        default=choices.FormStatus.DRAFT,
    )
    patient_name = models.CharField("Patient name", max_length=255, blank=True)
    record_number = models.CharField("Record number", max_length=50, blank=True)
    date_of_birth = models.DateField("Date of birth", null=True, blank=True)
    sex = models.CharField("Sex", max_length=10, choices=user_choices.Sex.choices, blank=True)
    diagnosis = models.TextField("Diagnosis", blank=True)
    diet = models.TextField("Diet", blank=True)
    allergies = models.TextField("Allergies", blank=True)
    physician_name = models.CharField("Physician name", max_length=255, blank=True)
    physician_phone = models.CharField("Physician phone", max_length=20, blank=True)
    facility_name = models.CharField("Facility", max_length=255, blank=True)
    vital_signs_instructions = models.TextField("Vital signs instructions", blank=True)
    comments = models.TextField("Comments", blank=True)

    objects = MarFormQuerySet.as_manager()

    class Meta:
        db_table = "mar_forms"
        verbose_name = "MAR form"
        verbose_name_plural = "MAR forms"
        indexes = [
            models.Index(fields=["patient", "month_year"], name="idx_mar_form_patient_month"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.patient_name or self.patient_id} - {self.month_year}"
