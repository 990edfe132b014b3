from django.db import models


class UserType(models.IntegerChoices):
    """【业务说明】区分不同账号角色；【用法】CustomUser.user_type；【使用示例】UserType.NURSE。"""

    NURSE = 1, "Nurse"
    ADMIN = 2, "Administrator"


class Sex(models.TextChoices):
    """【业务说明】患者性别枚举，取值与纸质 MAR 表头一致；【用法】Patient.sex / Form.sex。"""

    MALE = "Male", "Male"
    FEMALE = "Female", "Female"
    OTHER = "Other", "Other"
