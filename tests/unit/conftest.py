# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供隔离环境变量、应用实例与用户数据构造的通用 fixtures。
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from app import create_app, db
from app.models.user import User
from app.settings import Settings


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - unit tests 不依赖外部数据库
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.delenv("FLASK_DEBUG", raising=False)
    monkeypatch.delenv("USERS_API_BASE_URL", raising=False)
    monkeypatch.delenv("USERS_API_TIMEOUT", raising=False)


@pytest.fixture(scope="function")
def app():
    """创建测试应用实例并建表."""
    settings = Settings.load()
    app = create_app(settings=settings)
    app.config["TESTING"] = True
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def seed_users(app) -> Callable[..., list[User]]:
    """写入用户数据; 未指定时按序号生成 `User 01` / `user01@example.com`."""

    base_time = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)

    def _seed(count: int = 0, *, rows: list[tuple[str, str]] | None = None) -> list[User]:
        pairs = rows or [(f"User {index:02d}", f"user{index:02d}@example.com") for index in range(1, count + 1)]
        users = [
            User(name=name, email=email, created_at=base_time + timedelta(days=offset))
            for offset, (name, email) in enumerate(pairs)
        ]
        db.session.add_all(users)
        db.session.commit()
        return users

    return _seed
