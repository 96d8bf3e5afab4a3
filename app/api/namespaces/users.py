"""Users namespace."""

from __future__ import annotations

from typing import ClassVar

from flask import request
from flask_restx import Namespace, fields

from app.api.models.envelope import get_error_envelope_model, get_field_errors_model
from app.api.resources.base import BaseResource
from app.api.resources.decorators import api_access_required
from app.api.resources.query_parsers import new_parser
from app.services.users import UsersListService

ns = Namespace("users", description="用户目录")

ErrorEnvelope = get_error_envelope_model(ns)
FieldErrors = get_field_errors_model(ns)

UserItemModel = ns.model(
    "UserItem",
    {
        "id": fields.Integer(required=True, description="用户 ID", example=1),
        "name": fields.String(required=True, description="姓名", example="Anna"),
        "email": fields.String(required=True, description="邮箱", example="anna@example.com"),
        "created_at": fields.String(required=False, description="注册时间(ISO8601)", example="2025-01-01T00:00:00+00:00"),
    },
)

PageMetaModel = ns.model(
    "PageMeta",
    {
        "current_page": fields.Integer(required=True, example=2),
        "last_page": fields.Integer(required=True, example=2),
        "total": fields.Integer(required=True, example=12),
        "from": fields.Integer(required=True, description="当前页首条序号, 无数据时为 0", example=11),
        "to": fields.Integer(required=True, description="当前页末条序号, 无数据时为 0", example=12),
        "per_page": fields.Integer(required=True, example=10),
    },
)

UsersPageModel = ns.model(
    "UsersPage",
    {
        "data": fields.List(fields.Nested(UserItemModel)),
        "meta": fields.Nested(PageMetaModel),
    },
)

_users_list_query_parser = new_parser()
_users_list_query_parser.add_argument("page", type=str, location="args", help="页码, 从 1 开始")
_users_list_query_parser.add_argument("limit", type=str, location="args", help="每页条数, 默认 10")
_users_list_query_parser.add_argument("search", type=str, location="args", help="按 id/姓名/邮箱搜索")


@ns.route("")
class UsersResource(BaseResource):
    """用户列表资源."""

    method_decorators: ClassVar[list] = [api_access_required()]

    @ns.response(200, "OK", UsersPageModel)
    @ns.response(422, "Unprocessable Entity", FieldErrors)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    @ns.expect(_users_list_query_parser)
    def get(self):
        """分页获取用户列表."""
        query_snapshot = {key: request.args.get(key) for key in ("page", "limit") if key in request.args}

        def _execute():
            parsed = _users_list_query_parser.parse_args()
            page = UsersListService().list_users(parsed)
            return {
                "data": [item.to_dict() for item in page.data],
                "meta": page.meta.to_dict(),
            }, 200

        return self.safe_call(
            _execute,
            module="users",
            action="list_users",
            public_error="获取用户列表失败",
            context={"query_params": query_snapshot, "has_search": bool(request.args.get("search"))},
        )
