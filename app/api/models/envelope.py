"""OpenAPI: JSON Envelope Models.

说明:
- 仅用于文档表达; 实际响应以 `unified_success_response` / 错误处理器为准.
"""

from __future__ import annotations

from flask_restx import Model, Namespace, fields


def get_error_envelope_model(ns: Namespace) -> Model:
    """注册/获取错误封套 Model."""
    model_name = "ErrorEnvelope"
    if model_name in ns.models:
        return ns.models[model_name]

    return ns.model(
        model_name,
        {
            "success": fields.Boolean(required=True, description="是否成功", example=False),
            "error": fields.Boolean(required=True, description="是否错误", example=True),
            "error_id": fields.String(required=True, description="错误ID", example="a1b2c3d4"),
            "category": fields.String(required=True, description="错误分类", example="system"),
            "severity": fields.String(required=True, description="严重程度", example="high"),
            "message_code": fields.String(required=True, description="错误码", example="INTERNAL_ERROR"),
            "message": fields.String(required=True, description="可展示的错误摘要", example="服务器内部错误"),
            "timestamp": fields.String(required=True, description="时间戳(ISO8601)", example="2025-01-01T00:00:00"),
            "recoverable": fields.Boolean(required=True, description="是否可恢复", example=False),
            "suggestions": fields.List(
                fields.String, required=True, description="建议列表", example=["联系管理员"]
            ),
            "context": fields.Raw(required=True, description="结构化上下文信息", example={}),
        },
    )


def get_field_errors_model(ns: Namespace) -> Model:
    """注册/获取字段错误映射 Model(422 响应体)."""
    model_name = "FieldErrors"
    if model_name in ns.models:
        return ns.models[model_name]

    return ns.model(
        model_name,
        {
            "*": fields.Wildcard(
                fields.List(fields.String),
                description="字段名到错误文案列表的映射",
                example=["Users per page cannot be greater than total number of users (12)."],
            ),
        },
    )


def make_success_envelope_model(ns: Namespace, name: str, data_model: Model | None = None) -> Model:
    """构建成功封套 Model, data_model 可选."""
    envelope_fields: dict[str, fields.Raw] = {
        "success": fields.Boolean(required=True, description="是否成功", example=True),
        "error": fields.Boolean(required=True, description="是否错误", example=False),
        "message": fields.String(required=True, description="可展示的成功摘要", example="操作成功"),
        "timestamp": fields.String(required=True, description="时间戳(ISO8601)", example="2025-01-01T00:00:00"),
    }

    if data_model is None:
        envelope_fields["data"] = fields.Raw(required=False, description="响应数据(可选)", example={})
    else:
        envelope_fields["data"] = fields.Nested(data_model, required=False, description="响应数据(可选)")

    return ns.model(name, envelope_fields)
