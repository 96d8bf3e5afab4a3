"""用户目录 - 统一异常定义(Shared Kernel).

说明:
- 本模块只负责定义异常类型与语义字段,不包含 HTTP/Flask/Werkzeug 等框架细节.
- 异常到 HTTP status 的映射应在 API/HTTP 边界完成(见 `app/api/error_mapping.py`).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

if TYPE_CHECKING:
    from app.types.structures import LoggerExtra


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息(不包含传输层信息)."""

    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础业务异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.

    分类与严重度由子类的 ``metadata`` 决定.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
    ) -> None:
        """初始化基础业务异常."""
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = self.metadata.severity
        self.category = self.metadata.category
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """表示该异常是否可恢复."""

        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class ValidationError(AppError):
    """表示输入参数或请求体验证失败.

    ``field_errors`` 为按字段聚合的错误文案,非空时 API 边界直接以字段映射作为响应体.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        field_errors: Mapping[str, Sequence[str]] | None = None,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
    ) -> None:
        """初始化校验异常,可携带字段级错误."""
        self.field_errors: dict[str, list[str]] = {
            field: list(messages) for field, messages in (field_errors or {}).items()
        }
        if message is None and self.field_errors:
            message = next(iter(self.field_errors.values()))[0]
        super().__init__(message, message_key=message_key, extra=extra)


class AuthorizationError(AppError):
    """表示当前主体缺少访问目标资源的权限."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.AUTHORIZATION,
        severity=ErrorSeverity.MEDIUM,
        default_message_key="PERMISSION_DENIED",
    )


class TransportError(AppError):
    """表示客户端访问用户目录接口失败(网络错误、超时、非 2xx 响应或响应体损坏).

    由客户端在本地恢复(记录日志并停止加载),不向用户展示.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.NETWORK,
        severity=ErrorSeverity.MEDIUM,
        default_message_key="TRANSPORT_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        field_errors: Mapping[str, Sequence[str]] | None = None,
        extra: LoggerExtra | None = None,
    ) -> None:
        """初始化传输异常,记录可选的响应状态码与服务端字段错误."""
        self.status_code = status_code
        self.field_errors: dict[str, list[str]] = {
            field: list(messages) for field, messages in (field_errors or {}).items()
        }
        super().__init__(message, extra=extra)


class DatabaseError(AppError):
    """表示数据库查询或事务执行失败."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.DATABASE,
        severity=ErrorSeverity.HIGH,
        default_message_key="DATABASE_QUERY_ERROR",
    )


class SystemError(AppError):
    """表示系统级未知错误或底层故障."""


__all__ = [
    "AppError",
    "AuthorizationError",
    "DatabaseError",
    "ExceptionMetadata",
    "SystemError",
    "TransportError",
    "ValidationError",
]
