"""当前页的客户端排序.

排序只作用于已加载的当前页, 不触发重新请求, 也不影响服务端分页顺序.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import get_args

from app.core.types.users import SortKey, SortOrder, UserListItem
from app.utils.time_utils import UTC_TZ, time_utils

SORT_KEYS: tuple[SortKey, ...] = get_args(SortKey)
DEFAULT_SORT_KEY: SortKey = "id"
DEFAULT_SORT_ORDER: SortOrder = "asc"

_EPOCH_FLOOR = datetime.min.replace(tzinfo=UTC_TZ)


def _id_key(user: UserListItem) -> int:
    return user.id


def _created_at_key(user: UserListItem) -> datetime:
    return time_utils.to_utc(user.created_at) or _EPOCH_FLOOR


def _text_key(field: str) -> Callable[[UserListItem], str]:
    def _key(user: UserListItem) -> str:
        value = getattr(user, field, None)
        return "" if value is None else str(value).lower()

    return _key


_SORT_KEY_FUNCS: dict[str, Callable[[UserListItem], object]] = {
    "id": _id_key,
    "created_at": _created_at_key,
    "name": _text_key("name"),
    "email": _text_key("email"),
}


def sort_users(users: Sequence[UserListItem], key: SortKey, order: SortOrder) -> list[UserListItem]:
    """按列排序当前页用户, 返回新列表.

    `id` 按数值、`created_at` 按时间、`name`/`email` 忽略大小写按字符串比较;
    缺失值按空字符串(时间列按最早时间)处理. 排序稳定.
    """
    if key not in _SORT_KEY_FUNCS:
        raise ValueError(f"不支持的排序列: {key}")
    return sorted(users, key=_SORT_KEY_FUNCS[key], reverse=order == "desc")  # type: ignore[arg-type]


def next_sort(current_key: SortKey, current_order: SortOrder, clicked: SortKey) -> tuple[SortKey, SortOrder]:
    """点击列头后的排序状态: 同列切换方向, 换列则升序."""
    if clicked == current_key:
        return current_key, "desc" if current_order == "asc" else "asc"
    return clicked, "asc"


__all__ = ["DEFAULT_SORT_KEY", "DEFAULT_SORT_ORDER", "SORT_KEYS", "next_sort", "sort_users"]
