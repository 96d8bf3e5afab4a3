"""领域类型(dataclass)定义."""

from app.core.types.listing import Page, PageMeta, RawPage
from app.core.types.users import ListQuery, SortKey, SortOrder, UserListItem

__all__ = [
    "ListQuery",
    "Page",
    "PageMeta",
    "RawPage",
    "SortKey",
    "SortOrder",
    "UserListItem",
]
