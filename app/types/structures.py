"""通用结构化数据类型别名.

统一 JSON/Mapping 风格的类型,方便在视图、服务等模块中共享定义,避免重复声明.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from typing import TypeAlias

ScalarValue: TypeAlias = str | int | float | bool | None
ContextValue: TypeAlias = ScalarValue | Sequence["ContextValue"] | Mapping[str, "ContextValue"]
ContextDict: TypeAlias = dict[str, ContextValue]
JsonValue: TypeAlias = ScalarValue | Sequence["JsonValue"] | Mapping[str, "JsonValue"]
JsonDict: TypeAlias = dict[str, JsonValue]
StructlogEventDict: TypeAlias = MutableMapping[str, JsonValue]
LoggerExtra: TypeAlias = Mapping[str, JsonValue]
FieldErrors: TypeAlias = dict[str, list[str]]


__all__ = [
    "ContextDict",
    "ContextValue",
    "FieldErrors",
    "JsonDict",
    "JsonValue",
    "LoggerExtra",
    "ScalarValue",
    "StructlogEventDict",
]
