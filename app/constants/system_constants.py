"""用户目录 - 常量定义模块

统一管理错误分类、严重程度与对外文案.
"""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    BUSINESS = "business"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    NETWORK = "network"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"
    PERMISSION_DENIED = "权限不足"
    INVALID_REQUEST = "无效的请求"

    # 数据库错误
    DATABASE_QUERY_ERROR = "数据库查询错误"

    # 下游服务错误
    TRANSPORT_ERROR = "用户目录服务不可用"

    # 列表查询参数(对外契约, 保持英文原文)
    FIELD_NOT_INTEGER = "The {field} field must be an integer."
    FIELD_MIN = "The {field} field must be at least {minimum}."
    FIELD_NOT_STRING = "The {field} field must be a string."
    LIMIT_EXCEEDS_TOTAL = "Users per page cannot be greater than total number of users ({total})."
    GO_TO_PAGE_OUT_OF_RANGE = "Enter a number between 1 and {last_page}"


class SuccessMessages:
    """成功消息常量."""

    OPERATION_SUCCESS = "操作成功"
    HEALTH_OK = "服务正常"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "SuccessMessages",
]
