"""视图异常边界.

接口视图把业务闭包交给 `safe_route_call` 执行: 业务异常(AppError)与 HTTP 异常
照常向上抛出, 由 Api 的错误处理器渲染; 其它异常记录完整堆栈后统一包装为
`SystemError`, 对外只暴露 `public_error`, 不泄露内部细节.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, TypeVar

from werkzeug.exceptions import HTTPException

from app.core.exceptions import AppError, SystemError
from app.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from app.types import ContextDict, LoggerExtra

R = TypeVar("R")
LogLevel = Literal["info", "warning", "error"]
PASSTHROUGH_EXCEPTIONS: tuple[type[BaseException], ...] = (AppError, HTTPException)


def log_with_context(
    level: LogLevel,
    event: str,
    *,
    module: str,
    action: str,
    context: Mapping[str, object] | None = None,
    extra: LoggerExtra | None = None,
    exc_info: bool = False,
) -> None:
    """以 module/action 为固定维度记录一条结构化日志.

    context 描述请求本身(查询参数等), extra 描述结果或错误; 同名键以 extra 为准.
    """
    payload: ContextDict = {"module": module, "action": action}
    payload.update(context or {})  # type: ignore[arg-type]
    payload.update(extra or {})  # type: ignore[arg-type]
    if exc_info:
        payload["exc_info"] = True
    getattr(get_logger("api"), level)(event, **payload)


def safe_route_call(
    func: Callable[[], R],
    *,
    module: str,
    action: str,
    public_error: str,
    context: Mapping[str, object] | None = None,
) -> R:
    """执行视图闭包并统一异常出口.

    Raises:
        AppError: 业务层主动抛出的异常原样透传.
        HTTPException: 路由层异常(如 404/405)原样透传.
        SystemError: 其它异常, 消息为 public_error, 原异常挂在 __cause__ 上.

    """
    event = f"{action}执行失败"
    try:
        return func()
    except PASSTHROUGH_EXCEPTIONS as exc:
        log_with_context(
            "warning",
            event,
            module=module,
            action=action,
            context=context,
            extra={"error_type": exc.__class__.__name__, "error_message": str(exc)},
        )
        raise
    except Exception as exc:
        log_with_context(
            "error",
            event,
            module=module,
            action=action,
            context=context,
            extra={"error_type": exc.__class__.__name__, "unexpected": True},
            exc_info=True,
        )
        raise SystemError(public_error) from exc


__all__ = ["log_with_context", "safe_route_call"]
