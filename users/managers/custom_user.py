import uuid

from django.contrib.auth.base_user import BaseUserManager

from users import choices


class CustomUserManager(BaseUserManager):
    """
    【业务说明】封装护理人员账号的创建流程，统一处理用户名生成与密码设定。
    【用法】通过 `CustomUser.objects.create_user` 或 `create_superuser` 调用。
    【使用示例】`CustomUser.objects.create_user(full_name="Jane Doe", staff_initials="jd")`。
    """

    use_in_migrations = True

    def _generate_username(self) -> str:
        return f"user_{uuid.uuid4().hex[:20]}"

    def _create_user(self, username, password, **extra_fields):
        if not username:
            username = self._generate_username()
        user = self.model(username=username, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.full_clean()
        user.save(using=self._db)
        return user

    def create_user(self, username=None, password=None, **extra_fields):
        """
        【业务说明】创建普通护理账号，默认 user_type=护士 且无后台权限。
        【参数】username,str|None；password,str|None；extra_fields，自定义字段（如 full_name）。
        【返回值】CustomUser。
        """

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("user_type", choices.UserType.NURSE)
        return self._create_user(username, password, **extra_fields)

    def create_superuser(self, username=None, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("user_type", choices.UserType.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(username, password, **extra_fields)
