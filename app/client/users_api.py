"""用户目录 HTTP 客户端.

通过 `requests.Session` 调用 `GET /api/users`, 把响应体解析为 `Page[UserListItem]`.
网络错误、超时、非 2xx 响应与损坏的响应体统一抛出 `TransportError`, 不做重试.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import requests

from app.constants import HttpHeaders, HttpStatus
from app.core.exceptions import TransportError
from app.core.types.listing import Page, PageMeta
from app.core.types.users import UserListItem
from app.settings import DEFAULT_CLIENT_TIMEOUT_SECONDS
from app.utils.structlog_config import get_client_logger

USERS_PATH = "/api/users"


def parse_users_page(payload: object) -> Page[UserListItem]:
    """将 `{"data": [...], "meta": {...}}` 解析为 Page.

    Raises:
        TransportError: 响应体缺少字段或类型不符时抛出.

    """
    try:
        if not isinstance(payload, Mapping):
            raise TypeError("payload must be an object")
        raw_items = payload["data"]
        raw_meta = payload["meta"]
        if not isinstance(raw_items, list) or not isinstance(raw_meta, Mapping):
            raise TypeError("data must be a list and meta an object")
        users = [
            UserListItem(
                id=int(item["id"]),
                name=str(item["name"]),
                email=str(item["email"]),
                created_at=item.get("created_at"),
            )
            for item in raw_items
        ]
        per_page = raw_meta.get("per_page")
        meta = PageMeta(
            current_page=int(raw_meta["current_page"]),
            last_page=int(raw_meta["last_page"]),
            total=int(raw_meta["total"]),
            from_=int(raw_meta.get("from") or 0),
            to=int(raw_meta.get("to") or 0),
            per_page=int(per_page) if per_page is not None else None,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise TransportError("用户列表响应格式错误", extra={"reason": str(exc)}) from exc
    return Page(data=users, meta=meta)


class UsersApiClient:
    """`/api/users` 的同步客户端."""

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_CLIENT_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._logger = get_client_logger()

    def fetch_users(self, page: int, limit: int, search: str = "") -> Page[UserListItem]:
        """请求一页用户.

        Args:
            page: 页码(1 起始).
            limit: 每页条数.
            search: 搜索词, 空串表示不过滤.

        Returns:
            Page[UserListItem]: 当前页数据与分页元数据.

        Raises:
            TransportError: 请求失败或响应不可用. 422 时 `field_errors` 为服务端字段错误.

        """
        url = f"{self.base_url}{USERS_PATH}"
        params: dict[str, Any] = {"page": page, "limit": limit, "search": search}
        try:
            response = self.session.get(
                url,
                params=params,
                headers={HttpHeaders.ACCEPT: "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(
                f"请求用户列表失败: {exc.__class__.__name__}",
                extra={"url": url},
            ) from exc

        if response.status_code != HttpStatus.OK:
            raise self._error_from_response(response)

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(
                "用户列表响应不是合法 JSON",
                status_code=response.status_code,
            ) from exc

        result = parse_users_page(payload)
        self._logger.debug(
            "用户列表请求完成",
            page=page,
            limit=limit,
            total=result.meta.total,
        )
        return result

    @staticmethod
    def _error_from_response(response: requests.Response) -> TransportError:
        field_errors: dict[str, list[str]] = {}
        if response.status_code == HttpStatus.UNPROCESSABLE_ENTITY:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, Mapping):
                field_errors = {
                    str(field): [str(message) for message in messages]
                    for field, messages in body.items()
                    if isinstance(messages, list)
                }
        return TransportError(
            f"用户列表接口返回 HTTP {response.status_code}",
            status_code=response.status_code,
            field_errors=field_errors,
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()


__all__ = ["USERS_PATH", "UsersApiClient", "parse_users_page"]
