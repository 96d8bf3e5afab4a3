#!/usr/bin/env python3
"""用户目录演示数据生成脚本.

向 `users` 表写入若干演示用户, 便于本地联调分页与搜索:

    python scripts/seed_users.py --count 120
    python scripts/seed_users.py --count 12 --reset

`--reset` 会先清空 `users` 表. 表不存在时自动创建(等价于首次迁移).
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from collections.abc import Iterable
from datetime import datetime, timedelta

from app import create_app, db
from app.models.user import User
from app.utils.time_utils import time_utils

logging.basicConfig(level=logging.INFO, format="%(message)s")
LOGGER = logging.getLogger("scripts.seed_users")

FIRST_NAMES = (
    "Anna", "Bob", "Carla", "Dmitri", "Elena", "Farid", "Grace", "Hiro",
    "Ines", "Jonas", "Kemal", "Lena", "Marta", "Nikhil", "Olga", "Pavel",
)
LAST_NAMES = (
    "Andersen", "Bianchi", "Costa", "Dubois", "Eriksen", "Fischer", "Garcia",
    "Horvat", "Ivanova", "Jensen", "Kowalski", "Larsen", "Moreau", "Novak",
)


def build_demo_users(count: int, *, now: datetime, seed: int | None = None) -> list[User]:
    """构造 count 个演示用户, 注册时间分布在过去两年内."""
    rng = random.Random(seed)
    users: list[User] = []
    for index in range(1, count + 1):
        first = rng.choice(FIRST_NAMES)
        last = rng.choice(LAST_NAMES)
        users.append(
            User(
                name=f"{first} {last}",
                email=f"{first}.{last}.{index}@example.com".lower(),
                created_at=now - timedelta(days=rng.randint(0, 730), minutes=rng.randint(0, 1440)),
            ),
        )
    return users


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    """解析命令行参数."""
    parser = argparse.ArgumentParser(description="写入用户目录演示数据")
    parser.add_argument("--count", type=int, default=50, help="生成的用户数量")
    parser.add_argument("--reset", action="store_true", help="写入前清空 users 表")
    parser.add_argument("--seed", type=int, default=None, help="随机种子, 便于复现")
    return parser.parse_args(list(argv)[1:])


def main(argv: Iterable[str]) -> int:
    """脚本入口."""
    args = parse_args(argv)
    if args.count < 0:
        LOGGER.error("❌ --count 不能为负数")
        return 2

    app = create_app()
    with app.app_context():
        db.create_all()
        if args.reset:
            deleted = User.query.delete()
            LOGGER.info("已清空 users 表 (%s 行)", deleted)

        users = build_demo_users(args.count, now=time_utils.now(), seed=args.seed)
        db.session.add_all(users)
        db.session.commit()
        LOGGER.info("✅ 已写入 %s 个用户, 当前总数 %s", len(users), User.query.count())
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
