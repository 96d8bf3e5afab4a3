"""用户相关服务."""

from app.services.users.pagination_responder import build_page, build_page_meta
from app.services.users.users_list_service import UsersListService

__all__ = ["UsersListService", "build_page", "build_page_meta"]
