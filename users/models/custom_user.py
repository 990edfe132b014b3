import uuid

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from users import choices
from users.managers import CustomUserManager
from users.models.base import TimeStampedModel


def _generate_username() -> str:
    """
    【业务说明】默认账号需要一个系统唯一的用户名，便于 Django 认证体系工作。
    【返回值】str，形如 `user_f12ab34cd56ef7890`。
    """

    return f"user_{uuid.uuid4().hex[:20]}"


class CustomUser(TimeStampedModel, AbstractBaseUser, PermissionsMixin):
    """
    【业务说明】护理人员账号。除登录凭据外，还承载签署 MAR 所需的姓名缩写与签名文本。
    【用法】通过 Django 认证体系创建与登录；MAR 服务从这里解析默认缩写。
    【使用示例】`CustomUser.objects.create_user(username="jdoe", full_name="Jane Doe")`。
    """

    username = models.CharField(
        "Username",
        max_length=150,
        unique=True,
        default=_generate_username,
    )
    full_name = models.CharField("Full name", max_length=100, blank=True)
    staff_initials = models.CharField(
        "Staff initials",
        max_length=10,
        blank=True,
        help_text="【业务说明】填写给药格子时的默认缩写；【示例】JD",
    )
    staff_signature = models.TextField(
        "Staff signature",
        blank=True,
        help_text="【业务说明】签名文本（或签名图片 data URL），PRN 记录签名栏使用。",
    )
    user_type = models.PositiveSmallIntegerField(
        "User type",
        choices=choices.UserType.choices,
        default=choices.UserType.NURSE,
    )
    is_active = models.BooleanField("Active", default=True)
    is_staff = models.BooleanField("Staff status", default=False)
    date_joined = models.DateTimeField("Date joined", auto_now_add=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "username"
    REQUIRED_FIELDS: list[str] = []

    class Meta:
        verbose_name = "Clinician"
        verbose_name_plural = "Clinicians"

    def __str__(self) -> str:
        return self.full_name or self.username

    @property
    def display_name(self) -> str:
        return self.full_name or self.username
