"""跨层共享的类型别名."""

from app.types.structures import (
    ContextDict,
    ContextValue,
    FieldErrors,
    JsonDict,
    JsonValue,
    LoggerExtra,
    ScalarValue,
    StructlogEventDict,
)

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
