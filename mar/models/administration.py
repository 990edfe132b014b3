from typing import Dict, Iterable, List

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import connections, models

from users.models.base import TimeStampedModel

from . import choices

# 批量 upsert 时覆盖的字段；备注不在其中，已有备注保持不变
UPSERT_UPDATE_FIELDS = ["status", "initials", "administered_at", "updated_at"]


class AdministrationMarkQuerySet(models.QuerySet):
    """给药记录查询集封装，提供常用过滤与批量写入方法。"""

    def for_line_item(self, line_item_id):
        return self.filter(line_item_id=line_item_id)

    def for_line_items(self, line_item_ids: Iterable):
        return self.filter(line_item_id__in=list(line_item_ids))

    def for_day(self, line_item_id, day: int):
        return self.filter(line_item_id=line_item_id, day=day)

    def day_map(self, line_item_id) -> Dict[int, "AdministrationMark"]:
        """按日返回某一行的全部给药记录。"""
        return {mark.day: mark for mark in self.for_line_item(line_item_id).order_by("day")}

    def bulk_upsert(self, marks: List["AdministrationMark"]) -> List["AdministrationMark"]:
        """
        按 (line_item, day) 唯一键批量写入：不存在则插入，存在则覆盖 UPSERT_UPDATE_FIELDS。

        冲突时从不静默忽略（update_conflicts=True，而非 ignore_conflicts）。
        MySQL 不支持显式指定冲突目标，由唯一索引决定。
        """
        if not marks:
            return []
        connection = connections[self.db]
        options = {
            "update_conflicts": True,
            "update_fields": UPSERT_UPDATE_FIELDS,
        }
        if connection.features.supports_update_conflicts_with_target:
            options["unique_fields"] = ["line_item", "day"]
        return self.bulk_create(marks, **options)


class AdministrationMark(TimeStampedModel):
    """
    【业务说明】某一用药行在某一天（1-31）的给药记录。
    【约束】(line_item, day) 唯一；“未给药且无缩写”以不存在记录表示，不落库负记录。
    """

    line_item = models.ForeignKey(
        "mar.LineItem",
        on_delete=models.CASCADE,
        related_name="marks",
        verbose_name="Line item",
    )
    day = models.PositiveSmallIntegerField(
        "Day of month",
        validators=[MinValueValidator(1), MaxValueValidator(choices.MAX_DAY)],
    )
    status = models.CharField(
        "Status",
        max_length=20,
        choices=choices.AdministrationStatus.choices,
        default=choices.AdministrationStatus.GIVEN,
    )
    initials = models.CharField("Initials / code", max_length=50, blank=True)
    notes = models.TextField("Notes", blank=True)
    administered_at = models.DateTimeField("Administered at", null=True, blank=True)

    objects = AdministrationMarkQuerySet.as_manager()

    class Meta:
        db_table = "mar_administration_marks"
        verbose_name = "Administration mark"
        verbose_name_plural = "Administration marks"
        constraints = [
            models.UniqueConstraint(fields=["line_item", "day"], name="uniq_mar_mark_item_day"),
            models.CheckConstraint(
                condition=models.Q(day__gte=1) & models.Q(day__lte=choices.MAX_DAY),
                name="chk_mar_mark_day_range",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.line_item_id}@{self.day}: {self.status} {self.initials}"

    @property
    def code(self) -> str:
        return (self.initials or "").strip().upper()
