"""护理人员相关的纯业务计算。"""

from __future__ import annotations

from typing import Optional


def resolve_default_initials(user) -> Optional[str]:
    """
    【功能说明】
    - 计算护理人员在 MAR 格子中的默认缩写。

    【计算规则】
    - 优先使用 staff_initials（大写）；
    - 否则取 full_name 首个单词与最后一个单词的首字母（大写），只有一个单词时取其首字母；
    - 两者都为空时返回 None。

    【参数说明】
    - user: CustomUser 或任何带有 staff_initials / full_name 属性的对象，可为 None。
    """

    if user is None:
        return None
    staff_initials = (getattr(user, "staff_initials", "") or "").strip()
    if staff_initials:
        return staff_initials.upper()

    names = (getattr(user, "full_name", "") or "").split()
    if len(names) >= 2:
        return (names[0][0] + names[-1][0]).upper()
    if len(names) == 1:
        return names[0][0].upper()
    return None
