from django.db import migrations, models

import users.managers.custom_user
import users.models.custom_user


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="CustomUser",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                (
                    "username",
                    models.CharField(
                        default=users.models.custom_user._generate_username,
                        max_length=150,
                        unique=True,
                        verbose_name="Username",
                    ),
                ),
                ("full_name", models.CharField(blank=True, max_length=100, verbose_name="Full name")),
                (
                    "staff_initials",
                    models.CharField(
                        blank=True,
                        help_text="【业务说明】填写给药格子时的默认缩写；【示例】JD",
                        max_length=10,
                        verbose_name="Staff initials",
                    ),
                ),
                (
                    "staff_signature",
                    models.TextField(
                        blank=True,
                        help_text="【业务说明】签名文本（或签名图片 data URL），PRN 记录签名栏使用。",
                        verbose_name="Staff signature",
                    ),
                ),
                (
                    "user_type",
                    models.PositiveSmallIntegerField(
                        choices=[(1, "Nurse"), (2, "Administrator")],
                        default=1,
                        verbose_name="User type",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("is_staff", models.BooleanField(default=False, verbose_name="Staff status")),
                ("date_joined", models.DateTimeField(auto_now_add=True, verbose_name="Date joined")),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "Clinician",
                "verbose_name_plural": "Clinicians",
            },
            managers=[
                ("objects", users.managers.custom_user.CustomUserManager()),
            ],
        ),
        migrations.CreateModel(
            name="Patient",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("name", models.CharField(max_length=255, verbose_name="Patient name")),
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
            ],
            options={
                "verbose_name": "Patient",
                "verbose_name_plural": "Patients",
                "db_table": "users_patients",
                "ordering": ("name",),
            },
        ),
    ]
