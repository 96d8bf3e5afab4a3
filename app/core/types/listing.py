"""列表/分页通用结构类型."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class RawPage(Generic[T]):
    """仓库层返回的原始分页结果(尚未整形为对外封套)."""

    items: list[T]
    total: int
    page: int
    limit: int


@dataclass(frozen=True, slots=True)
class PageMeta:
    """分页元数据.

    ``from_`` / ``to`` 为当前页条目的 1 起始闭区间, 当前页无数据时均为 0.
    """

    current_page: int = 1
    last_page: int = 1
    total: int = 0
    from_: int = 0
    to: int = 0
    per_page: int | None = None

    def to_dict(self) -> dict[str, int | None]:
        payload: dict[str, int | None] = {
            "current_page": self.current_page,
            "last_page": self.last_page,
            "total": self.total,
            "from": self.from_,
            "to": self.to,
        }
        if self.per_page is not None:
            payload["per_page"] = self.per_page
        return payload


@dataclass(slots=True)
class Page(Generic[T]):
    """对外分页封套: ``{"data": [...], "meta": {...}}``."""

    data: list[T]
    meta: PageMeta = field(default_factory=PageMeta)
