"""工具模块.

主要工具:
- structlog_config: 结构化日志配置
- response_utils: 统一响应封套
- route_safety: 视图层异常与日志助手
- time_utils: 时间处理工具
"""
