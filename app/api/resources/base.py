"""Base Resource helpers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, TypeVar

from flask_restx import Resource

from app.utils.response_utils import unified_success_response
from app.utils.route_safety import safe_route_call

if TYPE_CHECKING:
    from app.types import JsonDict

R = TypeVar("R")


class BaseResource(Resource):
    """统一封套与 safe_route_call 适配."""

    def success(
        self,
        data: object | None = None,
        message: object | None = None,
        *,
        status: int = 200,
        meta: Mapping[str, object] | None = None,
    ) -> tuple[JsonDict, int]:
        return unified_success_response(data=data, message=message, status=status, meta=meta)

    def safe_call(
        self,
        func: Callable[[], R],
        *,
        module: str,
        action: str,
        public_error: str,
        context: Mapping[str, object] | None = None,
    ) -> R:
        return safe_route_call(func, module=module, action=action, public_error=public_error, context=context)
