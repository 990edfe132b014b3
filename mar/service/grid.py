"""
MAR 网格视图模型：把表单状态展开为 “行 x 31 天” 的格子，
每个格子带上生效、停用、可编辑等推导结果，前端无需再重复任何规则。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from mar.models import AdministrationMark, LineItem
from mar.models.choices import MAX_DAY, CellState
from mar.service.active_window import is_active
from mar.service.administration import cell_state
from mar.service.discontinuation import find_discontinuation_origin
from mar.service.mar_form import FormState, load_form_state
from mar.utils import parse_month_year


@dataclass
class GridCell:
    day: int
    active: bool
    state: str
    code: str = ""
    note: str = ""
    editable: bool = False
    is_origin: bool = False
    mark: Optional[AdministrationMark] = None


@dataclass
class GridRow:
    line_item: LineItem
    cells: List[GridCell] = field(default_factory=list)
    origin_day: Optional[int] = None
    group_key: str = ""
    group_start: bool = True
    group_size: int = 1


@dataclass
class Grid:
    state: FormState
    rows: List[GridRow] = field(default_factory=list)
    days: List[int] = field(default_factory=lambda: list(range(1, MAX_DAY + 1)))

    @property
    def form(self):
        return self.state.form


def _first_origin(line_item: LineItem, marks) -> Optional[int]:
    if line_item.is_vitals:
        return None
    return find_discontinuation_origin(marks, MAX_DAY + 1)


def build_row(line_item: LineItem, marks, form_month) -> GridRow:
    origin = _first_origin(line_item, marks)
    row = GridRow(line_item=line_item, origin_day=origin, group_key=line_item.group_key)
    for day in range(1, MAX_DAY + 1):
        active = is_active(line_item, form_month, day)
        blocked_by = origin if origin is not None and day > origin else None
        mark = marks.get(day)
        state = cell_state(mark, active, blocked_by)
        # 停用后的日期只靠 state 标记，停用代码只显示在起点那一天
        if state in (CellState.DISCONTINUED, CellState.INACTIVE) or mark is None:
            code = ""
        else:
            code = mark.initials
        row.cells.append(
            GridCell(
                day=day,
                active=active,
                state=state,
                code=code,
                note=mark.notes if mark is not None and state != CellState.INACTIVE else "",
                editable=active and blocked_by is None,
                is_origin=origin == day,
                mark=mark,
            )
        )
    return row


def _assign_groups(rows: List[GridRow]) -> None:
    """相邻且 group_key 相同的用药行合并为一组（药名单元格跨行显示）。"""
    index = 0
    while index < len(rows):
        end = index + 1
        while end < len(rows) and rows[end].group_key == rows[index].group_key:
            end += 1
        rows[index].group_start = True
        rows[index].group_size = end - index
        for follower in rows[index + 1 : end]:
            follower.group_start = False
            follower.group_size = 0
        index = end


def build_grid(form_id) -> Grid:
    """
    【功能说明】
    - 读取整张表单并生成网格视图模型。

    【返回值说明】
    - Grid：rows 按显示顺序排列，每行 31 个 GridCell。
    """

    state = load_form_state(form_id)
    form_month = parse_month_year(state.form.month_year)
    rows = [build_row(item, state.marks.get(item.pk, {}), form_month) for item in state.line_items]
    _assign_groups(rows)
    return Grid(state=state, rows=rows)
