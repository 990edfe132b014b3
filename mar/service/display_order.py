"""
用药行显示顺序管理。

两层职责：
- 局部：在已排好序的稀疏键（10, 20, 30 ...）之间为新行计算插入键；
- 全局：当表单中存在未设置顺序的行时，先按当前显示顺序整体补齐（1-based * 10），
  拖拽/上下移动后整体重排为稠密的 (index + 1) * 10。

排序约定：有顺序键的行在前（按键升序，键相同保持原有顺序），未设置键的行在后，
未设置键的行使用旧版分组规则：生命体征行在前，用药按 “名称|剂量|开始|停止” 分组，组内按时间点排序。
"""

from __future__ import annotations

import logging
from datetime import time
from typing import Iterable, List, Optional, Sequence

from django.core.exceptions import ValidationError
from django.db import transaction

from mar.models import LineItem, choices

logger = logging.getLogger(__name__)

ORDER_STEP = 10

InsertPosition = choices.InsertPosition
LineItemKind = choices.LineItemKind


def _legacy_key(item: LineItem):
    if item.is_vitals:
        return (0, "", time.min)
    return (1, item.group_key, item.hour or time.min)


def sort_line_items(items: Iterable[LineItem]) -> List[LineItem]:
    """
    【功能说明】
    - 按显示顺序排列用药行。调用方传入的顺序视为“存储顺序”（创建时间升序），用于打破平局。

    【返回值说明】
    - 新的 list，不修改入参。
    """

    items = list(items)
    keyed = sorted((item for item in items if item.display_order is not None), key=lambda item: item.display_order)
    unkeyed = sorted((item for item in items if item.display_order is None), key=_legacy_key)
    return keyed + unkeyed


def form_line_items(form_id) -> List[LineItem]:
    """读取表单全部行并按显示顺序排序（权威的整表视图）。"""
    queryset = LineItem.objects.for_form(form_id).order_by("created_at", "id")
    return sort_line_items(queryset)


def _key_or(key: Optional[int], fallback: int) -> int:
    return fallback if key is None else key


def compute_insert_key(keys: Sequence[int], target_index: int, position: str) -> int:
    """
    【功能说明】
    - 在 keys[target_index] 的上方或下方计算一个新的顺序键。

    【参数说明】
    - keys: 已补齐并按显示顺序排列的顺序键。
    - target_index: 目标行在 keys 中的下标。
    - position: "above" / "below"。

    【计算规则】
    - above: 与上一行（没有则为 target - 20）取中点（向下取整）；中点与任一端重合时取 target - 1。
    - below: 与下一行（没有则为 target + 20）取中点；重合时取 target + 1。
    - target - 1 / target + 1 可能与相邻键重复；新增行时由 place_rows 整表重排。
    """

    if position not in InsertPosition.values:
        raise ValidationError(f"Unknown insert position: {position!r}.")
    if not 0 <= target_index < len(keys):
        raise ValidationError("Insert target is not on this form.")

    target = _key_or(keys[target_index], 0)
    if position == InsertPosition.ABOVE:
        previous = target - 2 * ORDER_STEP
        if target_index > 0:
            previous = _key_or(keys[target_index - 1], previous)
        key = (previous + target) // 2
        if key in (previous, target):
            key = target - 1
        return key

    following = target + 2 * ORDER_STEP
    if target_index < len(keys) - 1:
        following = _key_or(keys[target_index + 1], following)
    key = (target + following) // 2
    if key in (target, following):
        key = target + 1
    return key


def default_key(kind: str, keys: Sequence[Optional[int]]) -> int:
    """未指定插入位置时的顺序键：生命体征放最上方，用药放最下方。"""
    values = [key or 0 for key in keys]
    if kind == LineItemKind.VITALS:
        if not values:
            return ORDER_STEP
        return min(min(values), ORDER_STEP) - ORDER_STEP
    return max(values + [0]) + ORDER_STEP


def _renumber(items: List[LineItem]) -> List[LineItem]:
    changed = []
    for index, item in enumerate(items):
        key = (index + 1) * ORDER_STEP
        if item.display_order != key:
            item.display_order = key
            changed.append(item)
    if changed:
        LineItem.objects.bulk_update(changed, ["display_order"])
    return items


@transaction.atomic
def normalize_display_order(form_id) -> List[LineItem]:
    """
    【功能说明】
    - 若表单中有任一行未设置顺序键，则按当前显示顺序为所有行重新赋值 (position) * 10。
    - 所有行均已有键时不做任何写入。

    【返回值说明】
    - 按显示顺序排列的全部行。
    """

    items = form_line_items(form_id)
    if any(item.display_order is None for item in items):
        _renumber(items)
        logger.info("显示顺序已补齐 form=%s count=%s", form_id, len(items))
    return items


@transaction.atomic
def apply_order(form_id, ordered_ids: Sequence) -> List[LineItem]:
    """按调用方给出的完整 ID 顺序稠密重排；ID 集合必须与表单现有行完全一致。"""
    items = {item.pk: item for item in LineItem.objects.for_form(form_id)}
    try:
        ordered_ids = [int(pk) for pk in ordered_ids]
    except (TypeError, ValueError) as exc:
        raise ValidationError("Invalid line item id in order.") from exc
    if len(ordered_ids) != len(set(ordered_ids)) or set(ordered_ids) != set(items):
        raise ValidationError("Order must list every line item of the form exactly once.")

    ordered = _renumber([items[pk] for pk in ordered_ids])
    logger.info("显示顺序已重排 form=%s count=%s", form_id, len(ordered))
    return ordered


def move_line_item(form_id, item_id, new_index: int) -> List[LineItem]:
    """拖拽：把某行移动到 new_index（越界时夹到两端），然后整体重排。"""
    items = form_line_items(form_id)
    ids = [item.pk for item in items]
    try:
        ids.remove(int(item_id))
    except (TypeError, ValueError) as exc:
        raise ValidationError("Line item is not on this form.") from exc
    new_index = max(0, min(int(new_index), len(ids)))
    ids.insert(new_index, int(item_id))
    return apply_order(form_id, ids)


def move_line_item_step(item_id, direction: str) -> List[LineItem]:
    if direction not in ("up", "down"):
        raise ValidationError("Direction must be 'up' or 'down'.")
    try:
        item = LineItem.objects.get(pk=item_id)
    except (LineItem.DoesNotExist, ValueError, TypeError) as exc:
        raise ValidationError("Line item not found.") from exc

    items = form_line_items(item.form_id)
    index = next(i for i, candidate in enumerate(items) if candidate.pk == item.pk)
    new_index = index - 1 if direction == "up" else index + 1
    if not 0 <= new_index < len(items):
        return items
    return move_line_item(item.form_id, item.pk, new_index)


def keys_collide(form_id, row_ids: Sequence, first_key: int, last_key: int) -> bool:
    """新行占用的 [first_key, last_key] 区间内是否已有其他行。"""
    return (
        LineItem.objects.for_form(form_id)
        .exclude(pk__in=row_ids)
        .filter(display_order__gte=first_key, display_order__lte=last_key)
        .exists()
    )


@transaction.atomic
def place_rows(form_id, row_ids: Sequence, target_id, position: str) -> List[LineItem]:
    """
    【功能说明】
    - 把刚新增的一组行整体放到目标行的上方或下方，然后整表稠密重排。
    - 用于局部中点已经没有足够空隙的情况；目标行不存在时整组放到最后。
    """

    row_ids = [int(pk) for pk in row_ids]
    others = [item.pk for item in form_line_items(form_id) if item.pk not in row_ids]
    try:
        index = others.index(int(target_id))
    except (TypeError, ValueError):
        index = len(others)
    else:
        if position == InsertPosition.BELOW:
            index += 1
    return apply_order(form_id, others[:index] + row_ids + others[index:])


def next_insert_key(form_id, kind: str, target_id=None, position: Optional[str] = None) -> int:
    """
    【功能说明】
    - 为即将新增的行计算顺序键：指定了目标行与位置时先补齐全表顺序再取中点，
      否则（或目标行不存在）按类型放到最上/最下方。
    """

    if target_id and position:
        if position not in InsertPosition.values:
            raise ValidationError(f"Unknown insert position: {position!r}.")
        items = normalize_display_order(form_id)
        keys = [item.display_order for item in items]
        for index, item in enumerate(items):
            if str(item.pk) == str(target_id):
                return compute_insert_key(keys, index, position)
        logger.warning("插入目标不存在 form=%s target=%s，回退到默认位置", form_id, target_id)

    keys = list(LineItem.objects.for_form(form_id).values_list("display_order", flat=True))
    return default_key(kind, keys)
