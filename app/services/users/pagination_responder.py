"""分页响应整形.

纯函数: 将仓库层的 `RawPage` 转换为对外的 `Page` 封套, 不访问数据库.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import TypeVar

from app.core.types.listing import Page, PageMeta, RawPage

T = TypeVar("T")
R = TypeVar("R")


def build_page_meta(*, total: int, page: int, limit: int, item_count: int) -> PageMeta:
    """计算分页元数据.

    `last_page` 至少为 1; 当前页无数据(总数为 0 或页码越界)时 `from`/`to` 均为 0.
    """
    last_page = max(1, math.ceil(total / limit)) if limit > 0 else 1
    if item_count > 0:
        from_ = (page - 1) * limit + 1
        to = min(page * limit, total)
    else:
        from_ = 0
        to = 0
    return PageMeta(
        current_page=page,
        last_page=last_page,
        total=total,
        from_=from_,
        to=to,
        per_page=limit,
    )


def build_page(raw: RawPage[T], serializer: Callable[[T], R]) -> Page[R]:
    """将原始分页结果整形为 `Page`.

    Args:
        raw: 仓库层返回的原始分页结果.
        serializer: 单条记录的序列化函数.

    Returns:
        Page: 已序列化的数据与分页元数据.

    """
    data = [serializer(item) for item in raw.items]
    meta = build_page_meta(total=raw.total, page=raw.page, limit=raw.limit, item_count=len(data))
    return Page(data=data, meta=meta)


__all__ = ["build_page", "build_page_meta"]
