from django.db import models

from users import choices
from users.models.base import TimeStampedModel


class Patient(TimeStampedModel):
    """
    【业务说明】患者基础档案。新建 MAR 表单时，表头的人口学与临床字段从这里拷贝快照。
    【用法】mar.service.mar_form.start_form 读取；表单生成后两者互不影响。
    """

    name = models.CharField("Patient name", max_length=255)
    record_number = models.CharField("Record number", max_length=50, blank=True)
    date_of_birth = models.DateField("Date of birth", null=True, blank=True)
    sex = models.CharField("Sex", max_length=10, choices=choices.Sex.choices, blank=True)
    diagnosis = models.TextField("Diagnosis", blank=True)
    diet = models.TextField("Diet", blank=True)
    allergies = models.TextField("Allergies", blank=True)
    physician_name = models.CharField("Physician name", max_length=255, blank=True)
    physician_phone = models.CharField("Physician phone", max_length=20, blank=True)
    facility_name = models.CharField("Facility", max_length=255, blank=True)

    class Meta:
        db_table = "users_patients"
        verbose_name = "Patient"
        verbose_name_plural = "Patients"
        ordering = ("name",)

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.name} ({self.record_number})" if self.record_number else self.name
