"""用户相关类型定义."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal

from app.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE

SortKey = Literal["id", "name", "email", "created_at"]
SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True)
class ListQuery:
    """用户列表查询参数(校验后).

    每个请求构造一次, 以参数形式向下传递, 不依赖请求上下文.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE
    search: str | None = None


@dataclass(frozen=True, slots=True)
class UserListItem:
    """用户列表单行结构."""

    id: int
    name: str
    email: str
    created_at: str | None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
