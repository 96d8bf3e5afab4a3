"""用户目录 - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- `create_app(settings=...)` 只消费 Settings,不再直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 生产环境默认更严格: 缺失关键密钥/连接串会直接抛出 ValueError.
"""

from __future__ import annotations

import logging
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_ENVIRONMENT = "development"
APP_NAME = "用户目录"
APP_VERSION = "1.0.0"

DEFAULT_DB_CONNECTION_TIMEOUT_SECONDS = 30
DEFAULT_DB_MAX_CONNECTIONS = 20
DEFAULT_SQLALCHEMY_POOL_RECYCLE_SECONDS = 300
DEFAULT_SQLALCHEMY_MAX_OVERFLOW = 10

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "userdata/logs/app.log"
DEFAULT_LOG_MAX_SIZE_BYTES = 10 * 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 5
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

DEFAULT_CORS_ORIGINS = ("http://localhost:5001", "http://127.0.0.1:5001")

DEFAULT_API_DOCS_ENABLED = True

DEFAULT_CLIENT_BASE_URL = "http://127.0.0.1:5001"
DEFAULT_CLIENT_TIMEOUT_SECONDS = 10.0


def _parse_csv(raw: str) -> tuple[str, ...]:
    parts = [item.strip() for item in raw.split(",")]
    return tuple(item for item in parts if item)


def _resolve_sqlite_fallback_url() -> str:
    db_path = _resolve_sqlite_fallback_path()
    return f"sqlite:///{db_path.absolute()}"


def _resolve_sqlite_fallback_path() -> Path:
    return PROJECT_ROOT / "userdata" / "users_directory_dev.db"


class Settings(BaseSettings):
    """应用运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
        # `CORS_ORIGINS` 为逗号分隔字符串, 不做 JSON 解码
        enable_decoding=False,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default=APP_NAME, validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    secret_key: str = Field(default="", validation_alias="SECRET_KEY")

    database_url: str = Field(default="", validation_alias="DATABASE_URL")
    db_connection_timeout_seconds: int = Field(
        default=DEFAULT_DB_CONNECTION_TIMEOUT_SECONDS,
        validation_alias="DB_CONNECTION_TIMEOUT",
    )
    db_max_connections: int = Field(default=DEFAULT_DB_MAX_CONNECTIONS, validation_alias="DB_MAX_CONNECTIONS")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")
    log_file: str = Field(default=DEFAULT_LOG_FILE, validation_alias="LOG_FILE")
    log_max_size_bytes: int = Field(default=DEFAULT_LOG_MAX_SIZE_BYTES, validation_alias="LOG_MAX_SIZE")
    log_backup_count: int = Field(default=DEFAULT_LOG_BACKUP_COUNT, validation_alias="LOG_BACKUP_COUNT")
    enable_debug_log: bool = Field(default=False, validation_alias="ENABLE_DEBUG_LOG")

    cors_origins: tuple[str, ...] = Field(default=DEFAULT_CORS_ORIGINS, validation_alias="CORS_ORIGINS")

    api_docs_enabled: bool = Field(default=DEFAULT_API_DOCS_ENABLED, validation_alias="API_DOCS_ENABLED")

    client_base_url: str = Field(default=DEFAULT_CLIENT_BASE_URL, validation_alias="USERS_API_BASE_URL")
    client_timeout_seconds: float = Field(
        default=DEFAULT_CLIENT_TIMEOUT_SECONDS,
        validation_alias="USERS_API_TIMEOUT",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_csv_values(cls, value: object) -> object:
        if isinstance(value, str):
            return _parse_csv(value)
        if isinstance(value, (list, tuple, set)):
            return tuple(text for text in (str(item).strip() for item in value) if text)
        return value

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    @property
    def is_testing(self) -> bool:
        return self.environment.strip().lower() in {"testing", "test"}

    @property
    def sqlalchemy_engine_options(self) -> dict[str, object]:
        """生成 SQLAlchemy Engine 配置选项."""
        if self.database_url.startswith("sqlite"):
            return {"pool_pre_ping": True, "connect_args": {"check_same_thread": False}}
        return {
            "pool_pre_ping": True,
            "pool_recycle": DEFAULT_SQLALCHEMY_POOL_RECYCLE_SECONDS,
            "pool_timeout": self.db_connection_timeout_seconds,
            "max_overflow": DEFAULT_SQLALCHEMY_MAX_OVERFLOW,
            "pool_size": self.db_max_connections,
            "echo": bool(self.debug),
        }

    def to_flask_config(self) -> dict[str, object]:
        """转换为 Flask app.config 可写入的配置字典."""
        return {
            "ENVIRONMENT": self.environment,
            "DEBUG": self.debug,
            "TESTING": self.is_testing,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "SQLALCHEMY_DATABASE_URI": self.database_url,
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "SQLALCHEMY_ENGINE_OPTIONS": dict(self.sqlalchemy_engine_options),
            "LOG_LEVEL": self.log_level,
            "LOG_FILE": self.log_file,
            "LOG_MAX_SIZE": self.log_max_size_bytes,
            "LOG_BACKUP_COUNT": self.log_backup_count,
            "ENABLE_DEBUG_LOG": self.enable_debug_log,
            "CORS_ORIGINS": ",".join(self.cors_origins),
            "API_DOCS_ENABLED": self.api_docs_enabled,
            "RESTX_MASK_SWAGGER": False,
            "JSON_AS_ASCII": False,
        }

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _apply_defaults_and_validate(self) -> Settings:
        environment_normalized = self.environment.strip().lower()

        debug = self._resolve_debug(environment_normalized)
        self._ensure_secret_key(debug)
        self._ensure_database_url(environment_normalized)
        self._apply_api_docs_default(environment_normalized)

        self._validate()
        return self

    def _resolve_debug(self, environment_normalized: str) -> bool:
        if "debug" in self.model_fields_set:
            return bool(self.debug)
        debug = environment_normalized == "development"
        object.__setattr__(self, "debug", debug)
        return debug

    def _ensure_secret_key(self, debug: bool) -> None:
        if self.secret_key:
            return
        if self.is_production:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
        if debug:
            logger.warning("⚠️  开发环境使用随机生成的SECRET_KEY,生产环境请设置环境变量")

    def _ensure_database_url(self, environment_normalized: str) -> None:
        if self.database_url:
            return
        if environment_normalized == "production":
            raise ValueError("DATABASE_URL environment variable must be set in production")

        object.__setattr__(self, "database_url", _resolve_sqlite_fallback_url())
        if environment_normalized not in {"testing", "test"}:
            logger.warning(
                "⚠️  未设置 DATABASE_URL, 非 production 环境将回退 SQLite (sqlite_db_file=%s)",
                _resolve_sqlite_fallback_path().name,
            )

    def _apply_api_docs_default(self, environment_normalized: str) -> None:
        if environment_normalized != "production":
            return
        if "api_docs_enabled" in self.model_fields_set:
            return
        object.__setattr__(self, "api_docs_enabled", False)

    def _validate(self) -> None:
        """执行跨字段校验,统一抛出可读的 ValueError."""
        errors: list[str] = []
        checks: list[tuple[str, bool]] = [
            ("DB_CONNECTION_TIMEOUT 必须为正整数", self.db_connection_timeout_seconds <= 0),
            ("DB_MAX_CONNECTIONS 必须为正整数", self.db_max_connections <= 0),
            (f"LOG_LEVEL 仅支持 {'/'.join(sorted(_LOG_LEVELS))}", self.log_level not in _LOG_LEVELS),
            ("LOG_MAX_SIZE 必须为正整数(字节)", self.log_max_size_bytes <= 0),
            ("LOG_BACKUP_COUNT 必须为非负整数", self.log_backup_count < 0),
            ("USERS_API_TIMEOUT 必须为正数(秒)", self.client_timeout_seconds <= 0),
            (
                "USERS_API_BASE_URL 必须以 http:// 或 https:// 开头",
                not self.client_base_url.startswith(("http://", "https://")),
            ),
        ]
        for message, condition in checks:
            if condition:
                errors.append(message)

        if errors:
            joined = "; ".join(errors)
            raise ValueError(f"配置校验失败: {joined}")
