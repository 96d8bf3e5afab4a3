"""用户目录客户端: HTTP 访问、列表控制器与展示辅助."""

from app.client.debounce import Debouncer
from app.client.formatting import format_registration_date, page_label, range_label
from app.client.list_controller import ClientViewState, UserListController, UsersFetcher, ViewStatus
from app.client.sorting import next_sort, sort_users
from app.client.users_api import UsersApiClient, parse_users_page

__all__ = [
    "ClientViewState",
    "Debouncer",
    "UserListController",
    "UsersApiClient",
    "UsersFetcher",
    "ViewStatus",
    "format_registration_date",
    "next_sort",
    "page_label",
    "parse_users_page",
    "range_label",
    "sort_users",
]
