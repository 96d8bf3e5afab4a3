"""Flask-RESTX Api 定制.

- 携带字段错误的 ValidationError 直接以字段映射作为响应体(422)
- 其余异常统一映射为 `unified_error_response`
"""

from __future__ import annotations

from flask import Response, jsonify, request
from flask_restx import Api

from app.utils.response_utils import field_errors_response, jsonify_unified_success, unified_error_response
from app.utils.structlog_config import ErrorContext


class UsersDirectoryApi(Api):
    """统一错误封套的 RestX Api."""

    def render_root(self) -> tuple[Response, int]:  # type: ignore[override]
        """为 `/api/` 提供可发现性入口."""
        prefix = request.path.rstrip("/")
        docs_url = f"{prefix}{self._doc}" if self._doc else None
        return jsonify_unified_success(
            data={
                "docs_url": docs_url,
                "openapi_url": f"{prefix}/openapi.json",
                "users_url": f"{prefix}/users",
                "health_ping_url": f"{prefix}/health/ping",
            },
            message="API 已就绪",
        )

    def handle_error(self, e: Exception) -> Response:  # type: ignore[override]
        field_response = field_errors_response(e)
        if field_response is not None:
            return field_response
        payload, status_code = unified_error_response(e, context=ErrorContext(e, request))
        response = jsonify(payload)
        response.status_code = status_code
        return response
