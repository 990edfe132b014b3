import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="MarForm",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                (
                    "month_year",
                    models.CharField(
                        db_index=True,
                        help_text="规范化格式 YYYY-MM，例如 2025-11。",
                        max_length=7,
                        verbose_name="Month",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("submitted", "Submitted"), ("archived", "Archived")],
                        default="draft",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("patient_name", models.CharField(blank=True, max_length=255, verbose_name="Patient name")),
                ("record_number", models.CharField(blank=True, max_length=50, verbose_name="Record number")),
                ("date_of_birth", models.DateField(blank=True, null=True, verbose_name="Date of birth")),
                (
                    "sex",
                    models.CharField(
                        blank=True,
                        choices=[("Male", "Male"), ("Female", "Female"), ("Other", "Other")],
                        max_length=10,
                        verbose_name="Sex",
                    ),
                ),
                ("diagnosis", models.TextField(blank=True, verbose_name="Diagnosis")),
                ("diet", models.TextField(blank=True, verbose_name="Diet")),
                ("allergies", models.TextField(blank=True, verbose_name="Allergies")),
                ("physician_name", models.CharField(blank=True, max_length=255, verbose_name="Physician name")),
                ("physician_phone", models.CharField(blank=True, max_length=20, verbose_name="Physician phone")),
                ("facility_name", models.CharField(blank=True, max_length=255, verbose_name="Facility")),
                ("vital_signs_instructions", models.TextField(blank=True, verbose_name="Vital signs instructions")),
                ("comments", models.TextField(blank=True, verbose_name="Comments")),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_mar_forms",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Created by",
                    ),
                ),
                (
                    "patient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mar_forms",
                        to="users.patient",
                        verbose_name="Patient",
                    ),
                ),
            ],
            options={
                "verbose_name": "MAR form",
                "verbose_name_plural": "MAR forms",
                "db_table": "mar_forms",
                "indexes": [
                    models.Index(fields=["patient", "month_year"], name="idx_mar_form_patient_month"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LineItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                (
                    "kind",
                    models.CharField(
                        choices=[("medication", "Medication"), ("vitals", "Vital signs")],
                        default="medication",
                        max_length=20,
                        verbose_name="Kind",
                    ),
                ),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("dosage", models.TextField(blank=True, verbose_name="Dosage / instructions")),
                ("route", models.CharField(blank=True, max_length=100, verbose_name="Route")),
                ("start_date", models.DateField(verbose_name="Start date")),
                ("stop_date", models.DateField(blank=True, null=True, verbose_name="Stop date")),
                ("hour", models.TimeField(blank=True, null=True, verbose_name="Hour")),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                (
                    "parameter",
                    models.TextField(
                        blank=True,
                        help_text="监测阈值说明，例如 “Hold if SBP < 100”。",
                        verbose_name="Parameter",
                    ),
                ),
                (
                    "display_order",
                    models.IntegerField(
                        blank=True,
                        help_text="稀疏排序键，初始按 10 递增，便于在两行之间插入。",
                        null=True,
                        verbose_name="Display order",
                    ),
                ),
                ("frequency", models.PositiveSmallIntegerField(default=1, verbose_name="Times per day")),
                ("frequency_display", models.CharField(blank=True, max_length=100, verbose_name="Frequency label")),
                (
                    "form",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="line_items",
                        to="mar.marform",
                        verbose_name="MAR form",
                    ),
                ),
            ],
            options={
                "verbose_name": "Line item",
                "verbose_name_plural": "Line items",
                "db_table": "mar_line_items",
                "indexes": [
                    models.Index(fields=["form", "display_order"], name="idx_mar_item_form_order"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AdministrationMark",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                (
                    "day",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(31),
                        ],
                        verbose_name="Day of month",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("Given", "Given"), ("Not Given", "Not Given"), ("PRN", "PRN")],
                        default="Given",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("initials", models.CharField(blank=True, max_length=50, verbose_name="Initials / code")),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("administered_at", models.DateTimeField(blank=True, null=True, verbose_name="Administered at")),
                (
                    "line_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="marks",
                        to="mar.lineitem",
                        verbose_name="Line item",
                    ),
                ),
            ],
            options={
                "verbose_name": "Administration mark",
                "verbose_name_plural": "Administration marks",
                "db_table": "mar_administration_marks",
                "constraints": [
                    models.UniqueConstraint(fields=("line_item", "day"), name="uniq_mar_mark_item_day"),
                    models.CheckConstraint(
                        condition=models.Q(("day__gte", 1), ("day__lte", 31)),
                        name="chk_mar_mark_day_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PRNRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("date", models.DateField(verbose_name="Date")),
                ("hour", models.TimeField(blank=True, null=True, verbose_name="Hour")),
                ("initials", models.CharField(blank=True, max_length=50, null=True, verbose_name="Initials")),
                ("medication", models.CharField(max_length=255, verbose_name="Medication")),
                ("reason", models.TextField(verbose_name="Reason")),
                ("result", models.TextField(blank=True, null=True, verbose_name="Result")),
                ("staff_signature", models.TextField(blank=True, null=True, verbose_name="Staff signature")),
                ("note", models.TextField(blank=True, null=True, verbose_name="Note")),
                ("entry_number", models.PositiveIntegerField(blank=True, null=True, verbose_name="Entry number")),
                (
                    "form",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="prn_records",
                        to="mar.marform",
                        verbose_name="MAR form",
                    ),
                ),
            ],
            options={
                "verbose_name": "PRN record",
                "verbose_name_plural": "PRN records",
                "db_table": "mar_prn_records",
                "ordering": ("entry_number", "id"),
            },
        ),
        migrations.CreateModel(
            name="VitalSignsReading",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                (
                    "day",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(31),
                        ],
                        verbose_name="Day of month",
                    ),
                ),
                (
                    "temperature",
                    models.DecimalField(blank=True, decimal_places=1, max_digits=5, null=True, verbose_name="Temperature"),
                ),
                ("pulse", models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="Pulse")),
                ("respiration", models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="Respiration")),
                (
                    "weight",
                    models.DecimalField(blank=True, decimal_places=1, max_digits=6, null=True, verbose_name="Weight"),
                ),
                ("systolic_bp", models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="Systolic BP")),
                ("diastolic_bp", models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="Diastolic BP")),
                ("bowel_movement", models.CharField(blank=True, max_length=50, null=True, verbose_name="Bowel movement")),
                (
                    "form",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vital_signs",
                        to="mar.marform",
                        verbose_name="MAR form",
                    ),
                ),
            ],
            options={
                "verbose_name": "Vital signs reading",
                "verbose_name_plural": "Vital signs readings",
                "db_table": "mar_vital_signs",
                "constraints": [
                    models.UniqueConstraint(fields=("form", "day"), name="uniq_mar_vitals_form_day"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CustomLegend",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("code", models.CharField(max_length=10, verbose_name="Code")),
                ("description", models.TextField(verbose_name="Description")),
                (
                    "clinician",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mar_custom_legends",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Clinician",
                    ),
                ),
            ],
            options={
                "verbose_name": "Custom legend",
                "verbose_name_plural": "Custom legends",
                "db_table": "mar_custom_legends",
                "ordering": ("code",),
                "constraints": [
                    models.UniqueConstraint(fields=("clinician", "code"), name="uniq_mar_legend_clinician_code"),
                ],
            },
        ),
    ]
