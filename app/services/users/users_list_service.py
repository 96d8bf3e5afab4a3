"""用户列表 Service.

职责:
- 校验原始 query 参数, 再组织 repository 调用并整形为分页封套
- 不做 Query 细节、不做 Response、不 commit
"""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import DatabaseError
from app.core.types.listing import Page
from app.core.types.users import UserListItem
from app.models.user import User
from app.repositories.users_repository import UsersRepository
from app.schemas.users_query import validate_list_query
from app.services.users.pagination_responder import build_page
from app.utils.structlog_config import log_error, log_info
from app.utils.time_utils import time_utils

MODULE = "users"


def to_list_item(user: User) -> UserListItem:
    return UserListItem(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=time_utils.to_json_serializable(user.created_at),
    )


class UsersListService:
    """用户列表业务编排服务."""

    def __init__(self, repository: UsersRepository | None = None) -> None:
        """初始化服务并注入用户仓库."""
        self._repository = repository or UsersRepository()

    def list_users(self, raw_args: Mapping[str, object]) -> Page[UserListItem]:
        """校验参数并分页列出用户.

        Args:
            raw_args: 原始 query 参数(`page`/`limit`/`search`).

        Returns:
            Page[UserListItem]: 当前页用户与分页元数据.

        Raises:
            ValidationError: 参数不合法时抛出, 此时不会执行列表查询.
            DatabaseError: 统计或分页查询失败时抛出.

        """
        try:
            list_query = validate_list_query(raw_args, count_users=self._repository.count_users)
            raw_page = self._repository.list_users(list_query)
        except SQLAlchemyError as exc:
            log_error("查询用户列表失败", module=MODULE, exception=exc)
            raise DatabaseError(message="查询用户列表失败") from exc

        page = build_page(raw_page, to_list_item)
        log_info(
            "用户列表查询完成",
            module=MODULE,
            page=list_query.page,
            limit=list_query.limit,
            has_search=bool(list_query.search),
            total=page.meta.total,
        )
        return page
