"""Schema 基础设施."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class QuerySchema(BaseModel):
    """读路径 query 参数的基础 schema.

    约定:
    - 默认忽略未知字段, 以兼容客户端附带的额外参数.
    - schema 负责类型转换、默认值与字段级错误文案.
    - 校验后的 schema 只作为中间态, 应尽快转换为不可变的领域类型.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)
