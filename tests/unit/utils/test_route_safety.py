import pytest
from werkzeug.exceptions import MethodNotAllowed

import app.utils.route_safety as route_safety_module
from app.core.exceptions import SystemError, ValidationError
from app.utils.route_safety import safe_route_call


@pytest.fixture
def log_calls(monkeypatch) -> list[tuple[str, str, dict[str, object]]]:
    calls: list[tuple[str, str, dict[str, object]]] = []

    def _fake_log_with_context(level: str, event: str, **kwargs: object) -> None:
        calls.append((level, event, dict(kwargs)))

    monkeypatch.setattr(route_safety_module, "log_with_context", _fake_log_with_context)
    return calls


@pytest.mark.unit
def test_safe_route_call_returns_result(log_calls) -> None:
    assert safe_route_call(lambda: 42, module="users", action="list_users", public_error="失败") == 42
    assert log_calls == []


@pytest.mark.unit
def test_safe_route_call_reraises_app_errors(log_calls) -> None:
    error = ValidationError(field_errors={"page": ["bad"]})

    def _raise():
        raise error

    with pytest.raises(ValidationError) as excinfo:
        safe_route_call(
            _raise,
            module="users",
            action="list_users",
            public_error="失败",
            context={"query_params": {"page": "x"}},
        )

    assert excinfo.value is error
    level, event, kwargs = log_calls[0]
    assert level == "warning"
    assert event == "list_users执行失败"
    assert kwargs["module"] == "users"
    assert kwargs["context"] == {"query_params": {"page": "x"}}
    assert kwargs["extra"] == {"error_type": "ValidationError", "error_message": "bad"}


@pytest.mark.unit
def test_safe_route_call_passes_http_exceptions_through(log_calls) -> None:
    def _raise():
        raise MethodNotAllowed()

    with pytest.raises(MethodNotAllowed):
        safe_route_call(_raise, module="users", action="list_users", public_error="失败")

    assert log_calls[0][0] == "warning"


@pytest.mark.unit
def test_safe_route_call_wraps_unexpected_errors(log_calls) -> None:
    def _raise():
        raise KeyError("boom")

    with pytest.raises(SystemError) as excinfo:
        safe_route_call(_raise, module="users", action="list_users", public_error="获取用户列表失败")

    assert excinfo.value.message == "获取用户列表失败"
    assert isinstance(excinfo.value.__cause__, KeyError)
    level, _event, kwargs = log_calls[0]
    assert level == "error"
    assert kwargs["exc_info"] is True
    assert kwargs["extra"] == {"error_type": "KeyError", "unexpected": True}
