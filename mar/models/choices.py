"""MAR 业务模型通用枚举。"""

from django.db import models

# 网格固定 31 列，与纸质 MAR 一致
MAX_DAY = 31


class FormStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    SUBMITTED = "submitted", "Submitted"
    ARCHIVED = "archived", "Archived"


class LineItemKind(models.TextChoices):
    """用药行的显式类型标记，取代旧数据里 “VITALS” 名称哨兵的约定。"""

    MEDICATION = "medication", "Medication"
    VITALS = "vitals", "Vital signs"


class AdministrationStatus(models.TextChoices):
    GIVEN = "Given", "Given"
    NOT_GIVEN = "Not Given", "Not Given"
    PRN = "PRN", "PRN"


class InsertPosition(models.TextChoices):
    ABOVE = "above", "Above"
    BELOW = "below", "Below"


class CellState(models.TextChoices):
    """网格格子的展示状态；DISCONTINUED 与 INACTIVE 为推导状态，不落库。"""

    INACTIVE = "inactive", "Inactive"
    UNSET = "unset", "Unset"
    GIVEN = "given", "Given"
    NOT_GIVEN = "not_given", "Not Given"
    PRN = "prn", "PRN"
    DISCONTINUED = "discontinued", "Discontinued"
