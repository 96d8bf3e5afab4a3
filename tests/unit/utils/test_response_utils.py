"""
响应工具函数单元测试
"""

import re
from typing import Any

import pytest
from flask import Flask
from werkzeug.exceptions import NotFound

from app.api.error_mapping import map_exception_to_status
from app.constants.system_constants import ErrorCategory, ErrorSeverity, SuccessMessages
from app.core.exceptions import AuthorizationError, DatabaseError, SystemError, TransportError, ValidationError
from app.utils.response_utils import (
    field_errors_response,
    jsonify_unified_success,
    unified_error_response,
    unified_success_response,
)


@pytest.fixture
def flask_app() -> Any:
    """构造临时 Flask 应用，供 jsonify 系列函数使用"""
    app = Flask(__name__)
    app.config["TESTING"] = True
    return app


@pytest.mark.unit
def test_unified_success_response_default():
    """默认成功响应结构包含必要字段"""
    payload, status = unified_success_response()

    assert status == 200
    assert payload["success"] is True
    assert payload["error"] is False
    assert payload["message"] == SuccessMessages.OPERATION_SUCCESS
    assert re.match(r"\d{4}-\d{2}-\d{2}T", payload["timestamp"])
    assert "data" not in payload


@pytest.mark.unit
def test_jsonify_unified_success(flask_app: Any):
    with flask_app.app_context():
        response, status = jsonify_unified_success(data={"key": "value"})

    assert status == 200
    assert response.get_json()["data"] == {"key": "value"}


@pytest.mark.unit
def test_unified_error_response_for_system_error(flask_app: Any):
    """系统错误映射为 500 并隐藏内部细节"""
    with flask_app.test_request_context("/api/users"):
        payload, status = unified_error_response(SystemError("获取用户列表失败"))

    assert status == 500
    assert payload["success"] is False
    assert payload["error"] is True
    assert payload["category"] == ErrorCategory.SYSTEM.value
    assert payload["severity"] == ErrorSeverity.HIGH.value
    assert payload["message"] == "获取用户列表失败"
    assert payload["recoverable"] is False
    assert payload["context"]["url"].endswith("/api/users")
    assert payload["suggestions"]


@pytest.mark.unit
def test_unified_error_response_hides_unexpected_exception_message(flask_app: Any):
    with flask_app.test_request_context("/"):
        payload, status = unified_error_response(RuntimeError("password=secret"))

    assert status == 500
    assert "secret" not in payload["message"]


@pytest.mark.unit
def test_field_errors_response_renders_field_map(flask_app: Any):
    error = ValidationError(field_errors={"limit": ["too big"]})

    with flask_app.app_context():
        response = field_errors_response(error)

    assert response is not None
    assert response.status_code == 422
    assert response.get_json() == {"limit": ["too big"]}


@pytest.mark.unit
def test_field_errors_response_ignores_other_errors():
    assert field_errors_response(ValidationError("bad")) is None
    assert field_errors_response(RuntimeError("boom")) is None


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (ValidationError("bad"), 400),
        (ValidationError(field_errors={"page": ["x"]}), 422),
        (AuthorizationError(), 403),
        (NotFound(), 404),
        (SystemError(), 500),
        (DatabaseError(), 500),
        (TransportError(status_code=404), 500),
        (RuntimeError(), 500),
    ],
)
def test_map_exception_to_status(error, expected: int):
    assert map_exception_to_status(error) == expected
