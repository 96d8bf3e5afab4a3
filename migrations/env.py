"""Alembic 环境脚本.

在 `flask db` 命令中注入 Flask 上下文,提供在线/离线两种模式的迁移入口.
"""

from __future__ import annotations

import logging
from logging.config import fileConfig
from typing import TYPE_CHECKING, Any

from alembic import context
from flask import current_app

if TYPE_CHECKING:
    from alembic.runtime.environment import MigrationContext
    from sqlalchemy.engine import Engine
    from sqlalchemy.sql.schema import MetaData

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)
logger = logging.getLogger("alembic.env")


def get_engine() -> Engine:
    """获取当前 Flask 应用绑定的 SQLAlchemy Engine."""
    return current_app.extensions["migrate"].db.engine


def get_engine_url() -> str:
    """生成数据库连接串(保留密码并转义 `%`)."""
    return get_engine().url.render_as_string(hide_password=False).replace("%", "%%")


config.set_main_option("sqlalchemy.url", get_engine_url())
target_db = current_app.extensions["migrate"].db


def get_metadata() -> MetaData:
    if hasattr(target_db, "metadatas"):
        return target_db.metadatas[None]
    return target_db.metadata


def run_migrations_offline() -> None:
    """以离线模式运行迁移,仅依赖数据库 URL,适合生成 SQL."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(url=url, target_metadata=get_metadata(), literal_binds=True)

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """以在线模式运行迁移,直接对数据库执行变更."""

    def process_revision_directives(
        _context: MigrationContext,
        _revision: tuple[str, str] | str | None,
        directives: list[Any],
    ) -> None:
        """autogenerate 时若无 schema 变更则不生成空迁移."""
        if getattr(config.cmd_opts, "autogenerate", False):
            script = directives[0]
            if script.upgrade_ops.is_empty():
                directives[:] = []
                logger.info("No changes in schema detected.")

    conf_args = current_app.extensions["migrate"].configure_args
    if conf_args.get("process_revision_directives") is None:
        conf_args["process_revision_directives"] = process_revision_directives

    with get_engine().connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=get_metadata(),
            **conf_args,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
