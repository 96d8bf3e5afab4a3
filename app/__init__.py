"""用户目录 - Flask 应用初始化.

基于 Flask 的分页、可搜索用户目录 JSON API.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Flask, jsonify, request
from flask.typing import ResponseReturnValue
from flask_cors import CORS
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

from app.constants import HttpHeaders
from app.settings import Settings
from app.utils.response_utils import field_errors_response, unified_error_response
from app.utils.structlog_config import ErrorContext, configure_structlog

# 初始化扩展
db = SQLAlchemy()
migrate = Migrate()
cors = CORS()


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 初始化扩展
    initialize_extensions(app, resolved_settings)

    # 注册蓝图
    configure_blueprints(app, resolved_settings)

    # 配置日志
    configure_logging(app)

    # 配置统一日志系统
    configure_structlog(app)

    # 设置全局日志级别
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    # 注册全局错误处理器
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        field_response = field_errors_response(error)
        if field_response is not None:
            return field_response
        payload, status_code = unified_error_response(error, context=ErrorContext(error, request))
        return jsonify(payload), status_code

    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    """
    app.config.from_mapping(settings.to_flask_config())
    app.config.setdefault("APPLICATION_ROOT", "/")


def initialize_extensions(app: Flask, settings: Settings) -> None:
    """初始化数据库、迁移与 CORS 扩展."""
    db.init_app(app)
    migrate.init_app(app, db)

    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": list(settings.cors_origins),
                "methods": ["GET", "OPTIONS"],
                "allow_headers": [HttpHeaders.CONTENT_TYPE, HttpHeaders.ACCEPT, HttpHeaders.X_REQUEST_ID],
                "expose_headers": [HttpHeaders.X_REQUEST_ID],
            },
        },
    )


def configure_blueprints(app: Flask, settings: Settings) -> None:
    """注册 API 蓝图与请求级日志钩子."""
    from app.api import register_api_blueprints  # noqa: PLC0415
    from app.utils.logging.request_context import register_request_logging  # noqa: PLC0415

    register_request_logging(app)
    register_api_blueprints(app, settings)


def configure_logging(app: Flask) -> None:
    """配置文件日志处理器(调试与测试模式下不落盘)."""
    if not app.debug and not app.testing:
        # 创建日志目录
        log_path = Path(app.config["LOG_FILE"])
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=app.config["LOG_MAX_SIZE"],
            backupCount=app.config["LOG_BACKUP_COUNT"],
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"),
        )
        file_handler.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        # structlog 经 stdlib LoggerFactory 输出到根 logger
        logging.getLogger().addHandler(file_handler)

        app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.info("用户目录应用启动")


from app.models import user  # noqa: F401, E402
