"""Health namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from app.api.models.envelope import get_error_envelope_model, make_success_envelope_model
from app.api.resources.base import BaseResource
from app.constants.system_constants import SuccessMessages

ns = Namespace("health", description="健康检查")

PingData = ns.model(
    "HealthPingData",
    {
        "status": fields.String(required=True, description="服务状态", example="ok"),
    },
)

PingSuccessEnvelope = make_success_envelope_model(ns, "HealthPingSuccessEnvelope", PingData)
ErrorEnvelope = get_error_envelope_model(ns)


@ns.route("/ping")
class HealthPingResource(BaseResource):
    @ns.response(200, "OK", PingSuccessEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        return self.success({"status": "ok"}, message=SuccessMessages.HEALTH_OK)
