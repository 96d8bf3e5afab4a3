"""API query 参数解析工具.

约束:
- 仅用于 API 层的 query params(`request.args`)
- 通过 `flask_restx.reqparse.RequestParser` 统一解析并配合 `@ns.expect(parser)`
- 类型与取值校验交给 `app/schemas`,parser 只负责原样提取字符串
"""

from __future__ import annotations

from typing import Final

from flask_restx import reqparse

_DEFAULT_BUNDLE_ERRORS: Final[bool] = True


def new_parser(*, bundle_errors: bool = _DEFAULT_BUNDLE_ERRORS) -> reqparse.RequestParser:
    """构造统一配置的 RequestParser."""
    return reqparse.RequestParser(bundle_errors=bundle_errors)
