"""Schema 校验与错误映射."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError
from app.types import FieldErrors

ModelT = TypeVar("ModelT", bound=BaseModel)

_FALLBACK_MESSAGE = "参数校验失败"
_NON_FIELD_KEY = "__all__"


def validate_or_raise(
    model: type[ModelT],
    payload: object,
    *,
    message_key: str | None = None,
    context: Mapping[str, Any] | None = None,
) -> ModelT:
    """执行 schema 校验并抛出项目的 ValidationError.

    Args:
        model: pydantic model.
        payload: 待校验的 payload(通常为 query 参数映射).
        message_key: 默认 message_key.
        context: 透传给 pydantic validator 的上下文(例如注入的查询能力).

    Raises:
        ValidationError: 校验失败时抛出, ``field_errors`` 汇总全部字段的错误文案.

    """
    try:
        return model.model_validate(payload, context=dict(context) if context else None)
    except PydanticValidationError as exc:
        field_errors = collect_field_errors(exc)
        raise ValidationError(field_errors=field_errors, message_key=message_key) from None


def collect_field_errors(exc: PydanticValidationError) -> FieldErrors:
    """将 pydantic 错误列表按字段聚合为 ``{field: [message, ...]}``."""
    field_errors: FieldErrors = {}
    for error in exc.errors():
        loc = error.get("loc")
        field = loc[0] if isinstance(loc, tuple) and loc and isinstance(loc[0], str) else _NON_FIELD_KEY
        field_errors.setdefault(field, []).append(_extract_message(error))
    if not field_errors:
        field_errors[_NON_FIELD_KEY] = [_FALLBACK_MESSAGE]
    return field_errors


def _extract_message(error: Mapping[str, Any]) -> str:
    ctx = error.get("ctx")
    if isinstance(ctx, dict) and "error" in ctx:
        raw_error = ctx.get("error")
        if isinstance(raw_error, BaseException):
            return str(raw_error)

    msg = error.get("msg")
    if isinstance(msg, str) and msg.strip():
        return msg

    return _FALLBACK_MESSAGE
