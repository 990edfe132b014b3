"""
web_nurse 视图模块聚合。

按功能拆分为多个子模块（forms、line_items、administration、prn、vitals、legends），
对外仍通过 `web_nurse.views` 暴露统一接口，方便 urls 使用。
"""

from .administration import administration_demote, administration_note, administration_set
from .forms import form_comments, form_grid, form_header, form_start
from .legends import legend_delete, legends
from .line_items import (
    line_item_add,
    line_item_delete,
    line_item_move,
    line_item_order,
    line_item_update,
)
from .prn import prn_add, prn_delete, prn_update_field
from .vitals import vital_sign_update

__all__ = [
    "administration_demote",
    "administration_note",
    "administration_set",
    "form_comments",
    "form_grid",
    "form_header",
    "form_start",
    "legend_delete",
    "legends",
    "line_item_add",
    "line_item_delete",
    "line_item_move",
    "line_item_order",
    "line_item_update",
    "prn_add",
    "prn_delete",
    "prn_update_field",
    "vital_sign_update",
]
