"""用户 Repository.

职责:
- 负责 Query 组装与数据库读取(read only)
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import or_
from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement

from app.core.types.listing import RawPage
from app.core.types.users import ListQuery
from app.models.user import User

# users.id 为 INTEGER(32 位有符号),超出上限的数字串不参与 id 匹配
_MAX_USER_ID = 2**31 - 1


def parse_search_id(search: str) -> int | None:
    """若搜索词是非负十进制整数则返回其值,否则返回 None."""
    if not (search.isascii() and search.isdigit()):
        return None
    value = int(search)
    return value if value <= _MAX_USER_ID else None


class UsersRepository:
    """用户查询 Repository."""

    @staticmethod
    def count_users() -> int:
        return int(User.query.count() or 0)

    def list_users(self, query_params: ListQuery) -> RawPage[User]:
        """按搜索条件分页读取用户,结果按主键升序.

        搜索词非空时条件为 ``id == 搜索词(仅数字) OR name ILIKE OR email ILIKE``,
        `%`/`_` 按字面匹配. 页码超出范围时返回空列表与真实总数.
        """
        query: Query[Any] = cast(Query[Any], User.query)
        id_column = cast(ColumnElement[int], User.id)
        name_column = cast(ColumnElement[str], User.name)
        email_column = cast(ColumnElement[str], User.email)

        search = query_params.search or ""
        if search:
            predicates: list[ColumnElement[bool]] = []
            search_id = parse_search_id(search)
            if search_id is not None:
                predicates.append(id_column == search_id)
            predicates.append(name_column.icontains(search, autoescape=True))
            predicates.append(email_column.icontains(search, autoescape=True))
            query = query.filter(or_(*predicates))

        query = query.order_by(id_column.asc())
        pagination = cast(Any, query).paginate(
            page=query_params.page,
            per_page=query_params.limit,
            error_out=False,
            count=True,
        )
        return RawPage(
            items=list(pagination.items),
            total=int(pagination.total or 0),
            page=query_params.page,
            limit=query_params.limit,
        )
