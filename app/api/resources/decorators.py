"""API decorators.

说明:
- API 的错误语义始终为 JSON(禁止 redirect/flash)
- 统一通过 AppError 体系让错误处理器输出标准错误封套
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from flask import request

from app.core.exceptions import AuthorizationError

P = ParamSpec("P")
R = TypeVar("R")

AccessPolicy = Callable[[], bool]


def allow_all() -> bool:
    """用户目录对所有调用方开放."""
    return True


def api_access_required(
    policy: AccessPolicy = allow_all,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """在 API 边界执行访问策略,策略拒绝时抛出 AuthorizationError."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if not policy():
                raise AuthorizationError(
                    extra={
                        "request_path": request.path,
                        "request_method": request.method,
                    },
                )
            return func(*args, **kwargs)

        return wrapper

    return decorator
