"""
【业务说明】mar 应用后台注册入口。
【用法】管理员在后台查看与修正表单、用药行、给药记录；日常录入走 web_nurse 接口。
"""

from django.contrib import admin

from mar.models import (
    AdministrationMark,
    CustomLegend,
    LineItem,
    MarForm,
    PRNRecord,
    VitalSignsReading,
)


class LineItemInline(admin.TabularInline):
    model = LineItem
    extra = 0
    fields = ("display_order", "kind", "name", "dosage", "route", "hour", "start_date", "stop_date")
    ordering = ("display_order", "id")
    show_change_link = True


class PRNRecordInline(admin.TabularInline):
    model = PRNRecord
    extra = 0
    fields = ("entry_number", "date", "hour", "medication", "reason", "result", "initials")


@admin.register(MarForm)
class MarFormAdmin(admin.ModelAdmin):
    list_display = ("patient_name", "month_year", "status", "facility_name", "created_by", "created_at")
    list_filter = ("status", "month_year")
    search_fields = ("patient_name", "record_number", "patient__name")
    raw_id_fields = ("patient", "created_by")
    inlines = [LineItemInline, PRNRecordInline]

    fieldsets = (
        ("Form", {"fields": ("patient", "month_year", "status", "created_by")}),
        (
            "Patient snapshot",
            {
                "fields": (
                    "patient_name",
                    "record_number",
                    "date_of_birth",
                    "sex",
                    "diagnosis",
                    "diet",
                    "allergies",
                    "physician_name",
                    "physician_phone",
                    "facility_name",
                )
            },
        ),
        ("Notes", {"fields": ("vital_signs_instructions", "comments")}),
    )


class AdministrationMarkInline(admin.TabularInline):
    model = AdministrationMark
    extra = 0
    fields = ("day", "status", "initials", "administered_at", "notes")
    ordering = ("day",)


@admin.register(LineItem)
class LineItemAdmin(admin.ModelAdmin):
    list_display = ("name", "kind", "dosage", "hour", "start_date", "stop_date", "display_order", "form")
    list_filter = ("kind",)
    search_fields = ("name", "dosage")
    raw_id_fields = ("form",)
    inlines = [AdministrationMarkInline]


@admin.register(AdministrationMark)
class AdministrationMarkAdmin(admin.ModelAdmin):
    list_display = ("line_item", "day", "status", "initials", "administered_at", "updated_at")
    list_filter = ("status",)
    search_fields = ("initials", "line_item__name")
    raw_id_fields = ("line_item",)


@admin.register(PRNRecord)
class PRNRecordAdmin(admin.ModelAdmin):
    list_display = ("form", "entry_number", "date", "hour", "medication", "initials")
    search_fields = ("medication", "reason", "initials")
    raw_id_fields = ("form",)


@admin.register(VitalSignsReading)
class VitalSignsReadingAdmin(admin.ModelAdmin):
    list_display = ("form", "day", "temperature", "pulse", "respiration", "systolic_bp", "diastolic_bp")
    raw_id_fields = ("form",)


@admin.register(CustomLegend)
class CustomLegendAdmin(admin.ModelAdmin):
    list_display = ("code", "description", "clinician")
    search_fields = ("code", "description")
