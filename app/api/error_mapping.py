"""用户目录 - 异常与 HTTP 状态码映射(API 边界).

说明:
- 异常定义属于 shared kernel(`app/core/exceptions.py`),不感知 HTTP.
- 本模块负责将异常映射为对外 HTTP 状态码,仅应在 HTTP 边界调用.
"""

from __future__ import annotations

from werkzeug.exceptions import HTTPException

from app.constants import HttpStatus
from app.core.exceptions import (
    AppError,
    AuthorizationError,
    ValidationError,
)

_EXCEPTION_STATUS_MAP: tuple[tuple[type[Exception], int], ...] = (
    (ValidationError, HttpStatus.BAD_REQUEST),
    (AuthorizationError, HttpStatus.FORBIDDEN),
)


def map_exception_to_status(error: BaseException, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """根据异常类型推导 HTTP 状态码.

    携带字段错误的 ValidationError 对应 422,其余校验错误为 400.
    """

    if isinstance(error, ValidationError) and error.field_errors:
        return HttpStatus.UNPROCESSABLE_ENTITY

    for exc_type, status in _EXCEPTION_STATUS_MAP:
        if isinstance(error, exc_type):
            return status

    if isinstance(error, AppError):
        return default

    if isinstance(error, HTTPException):
        code = getattr(error, "code", None)
        if code is not None:
            return int(code)

    return default


__all__ = ["map_exception_to_status"]
