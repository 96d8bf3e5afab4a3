"""用户列表 query schema(Query Validator).

目标:
- 将 `page` / `limit` / `search` 的规范化、默认值与边界校验收敛到 schema 单入口
- 字段错误一次性全部返回, 通过 `ValidationError.field_errors` 交给 API 边界
- “每页条数不得超过用户总数”依赖实时总数, 以注入的 `count_users()` 能力提供
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from app.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, ErrorMessages
from app.core.types.users import ListQuery
from app.schemas.base import QuerySchema
from app.schemas.query_parsers import ensure_minimum, parse_optional_int, parse_optional_text
from app.schemas.validation import validate_or_raise

CountUsers = Callable[[], int]

COUNT_USERS_CONTEXT_KEY = "count_users"


class UserListQuery(QuerySchema):
    """用户列表 query 参数 schema.

    `page` 缺省为 None(转换为领域类型时取 1); `limit` 缺省为 10 且默认值同样参与
    总数校验.
    """

    page: int | None = None
    limit: int = Field(default=DEFAULT_PAGE_SIZE, validate_default=True)
    search: str | None = None

    @field_validator("page", mode="before")
    @classmethod
    def _parse_page(cls, value: Any) -> int | None:
        return parse_optional_int(value, field="page")

    @field_validator("page")
    @classmethod
    def _check_page(cls, value: int | None) -> int | None:
        if value is None:
            return None
        return ensure_minimum(value, field="page")

    @field_validator("limit", mode="before")
    @classmethod
    def _parse_limit(cls, value: Any) -> int:
        parsed = parse_optional_int(value, field="limit")
        return DEFAULT_PAGE_SIZE if parsed is None else parsed

    @field_validator("limit")
    @classmethod
    def _check_limit(cls, value: int, info: ValidationInfo) -> int:
        ensure_minimum(value, field="limit")
        count_users = (info.context or {}).get(COUNT_USERS_CONTEXT_KEY)
        if count_users is None:
            return value
        total_users = int(count_users())
        if value > total_users:
            raise ValueError(ErrorMessages.LIMIT_EXCEEDS_TOTAL.format(total=total_users))
        return value

    @field_validator("search", mode="before")
    @classmethod
    def _parse_search(cls, value: Any) -> str | None:
        return parse_optional_text(value, field="search")

    def to_list_query(self) -> ListQuery:
        return ListQuery(
            page=self.page if self.page is not None else DEFAULT_PAGE,
            limit=self.limit,
            search=self.search,
        )


def validate_list_query(raw: Mapping[str, object], *, count_users: CountUsers) -> ListQuery:
    """校验原始 query 参数并返回不可变的 `ListQuery`.

    Args:
        raw: 原始参数映射, 值通常为字符串或 None.
        count_users: 返回当前用户总数的查询能力.

    Returns:
        ListQuery: 已应用默认值的查询参数.

    Raises:
        ValidationError: 任一字段不合法时抛出, 不会触发后续数据查询.

    """
    schema = validate_or_raise(
        UserListQuery,
        dict(raw),
        message_key="VALIDATION_ERROR",
        context={COUNT_USERS_CONTEXT_KEY: count_users},
    )
    return schema.to_list_query()


__all__ = ["COUNT_USERS_CONTEXT_KEY", "CountUsers", "UserListQuery", "validate_list_query"]
