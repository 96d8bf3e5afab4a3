"""创建 users 表.

Revision ID: 20261019090000
Revises:
Create Date: 2026-10-19

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019090000"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """执行升级迁移.

    创建用户目录读取的 `users` 表, `email` 唯一并建立索引.
    """
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)


def downgrade() -> None:
    """执行降级迁移."""
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
