"""
【业务说明】users 应用后台注册入口。
【用法】在此注册护理人员账号与患者档案，供管理员维护。
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from users.models import CustomUser, Patient


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("username", "full_name", "staff_initials", "user_type", "is_active")
    list_filter = ("user_type", "is_active", "is_staff")
    search_fields = ("username", "full_name", "staff_initials")
    ordering = ("username",)
    readonly_fields = ("date_joined", "last_login")

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        ("Clinician", {"fields": ("full_name", "staff_initials", "staff_signature", "user_type")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "full_name", "staff_initials", "password1", "password2"),
            },
        ),
    )


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ("name", "record_number", "date_of_birth", "sex", "facility_name")
    search_fields = ("name", "record_number")
    list_filter = ("sex",)
