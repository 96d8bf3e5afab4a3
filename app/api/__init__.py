"""用户目录 JSON API (Flask-RESTX) 入口.

- `/api/**` 为对外 JSON API 前缀
- 提供 Swagger UI 与 OpenAPI JSON 导出能力
"""

from __future__ import annotations

from flask import Flask

from app.settings import Settings


def register_api_blueprints(app: Flask, settings: Settings) -> None:
    """按 Settings 注册 API blueprint."""
    from app.api.blueprint import create_api_blueprint  # noqa: PLC0415

    api_bp = create_api_blueprint(settings)
    app.register_blueprint(api_bp, url_prefix="/api")
