"""Query 参数解析 helper.

说明：
- 这些函数只做“类型转换 + 去空白 + 空值归一”的稳定 canonicalization。
- 空白字符串一律视为未传入。
- 解析失败抛出 ValueError, 由 pydantic 收敛为字段级错误。
"""

from __future__ import annotations

import re
from typing import Any

from app.constants import ErrorMessages

_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


def parse_optional_int(value: Any, *, field: str) -> int | None:
    """Parse optional int (strip strings; blank -> None; reject bool/float text)."""
    if value is None:
        return None
    # bool 是 int 的子类，分页参数不应接受 bool。
    if isinstance(value, bool):
        raise ValueError(ErrorMessages.FIELD_NOT_INTEGER.format(field=field))
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        if _INTEGER_PATTERN.fullmatch(stripped):
            return int(stripped, 10)
    raise ValueError(ErrorMessages.FIELD_NOT_INTEGER.format(field=field))


def parse_optional_text(value: Any, *, field: str) -> str | None:
    """Parse optional text (strip; blank -> None; non-str rejected)."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(ErrorMessages.FIELD_NOT_STRING.format(field=field))
    stripped = value.strip()
    return stripped or None


def ensure_minimum(value: int, *, field: str, minimum: int = 1) -> int:
    """校验整数下限."""
    if value < minimum:
        raise ValueError(ErrorMessages.FIELD_MIN.format(field=field, minimum=minimum))
    return value


__all__ = ["ensure_minimum", "parse_optional_int", "parse_optional_text"]
