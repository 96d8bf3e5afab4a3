"""常量模块。

集中管理系统常量，包括错误消息、HTTP 相关常量与分页选项等。

主要常量：
- ErrorMessages: 错误消息常量
- HttpStatus: HTTP 状态码常量
- HttpHeaders: HTTP 头常量
- PAGINATION_SIZES: 每页条数选项
"""

# 导入所有系统常量
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    SuccessMessages,
)

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

# 导入HTTP头常量
from .http_headers import HttpHeaders

# 导入分页选项常量
from .filter_options import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    PAGINATION_SIZES,
    PAGINATION_WINDOW_RADIUS,
    SEARCH_DEBOUNCE_SECONDS,
)

# 导出所有常量
__all__ = [
    # 分页选项
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "PAGINATION_SIZES",
    "PAGINATION_WINDOW_RADIUS",
    "SEARCH_DEBOUNCE_SECONDS",
    # 系统常量
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpHeaders",
    "HttpStatus",
    "SuccessMessages",
]
