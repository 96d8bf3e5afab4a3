#!/usr/bin/env python3
"""用户目录命令行浏览脚本.

通过 `UserListController` 访问正在运行的服务, 打印指定页(可选搜索与排序):

    python scripts/browse_users.py --page 2 --per-page 25
    python scripts/browse_users.py --search ann --sort name --order desc
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Iterable
from concurrent.futures import Executor, Future

from app.client import Debouncer, UserListController, UsersApiClient, ViewStatus, format_registration_date
from app.client.sorting import SORT_KEYS
from app.constants import PAGINATION_SIZES
from app.settings import Settings

logging.basicConfig(level=logging.INFO, format="%(message)s")
LOGGER = logging.getLogger("scripts.browse_users")


class InlineExecutor(Executor):
    """在调用线程内同步执行任务, 命令行场景无需后台线程."""

    def submit(self, fn, /, *args, **kwargs):  # type: ignore[no-untyped-def,override]
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:  # noqa: BLE001 - 异常交给 future 持有者处理
            future.set_exception(exc)
        return future


class ImmediateTimer:
    """启动即触发的定时器, 命令行输入无需防抖等待."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self._callback = callback

    def start(self) -> None:
        self._callback()

    def cancel(self) -> None:
        return None


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    """解析命令行参数."""
    settings = Settings.load()
    parser = argparse.ArgumentParser(description="浏览用户目录")
    parser.add_argument("--base-url", default=settings.client_base_url, help="服务基础地址")
    parser.add_argument("--timeout", type=float, default=settings.client_timeout_seconds, help="请求超时时间(秒)")
    parser.add_argument("--page", type=int, default=1, help="页码")
    parser.add_argument("--per-page", type=int, default=PAGINATION_SIZES[0], choices=PAGINATION_SIZES)
    parser.add_argument("--search", default="", help="按 ID、姓名或邮箱搜索")
    parser.add_argument("--sort", default="id", choices=SORT_KEYS, help="当前页排序列")
    parser.add_argument("--order", default="asc", choices=("asc", "desc"), help="排序方向")
    return parser.parse_args(list(argv)[1:])


def main(argv: Iterable[str]) -> int:
    """脚本入口."""
    args = parse_args(argv)
    api = UsersApiClient(args.base_url, timeout=args.timeout)
    controller = UserListController(
        api,
        executor=InlineExecutor(),
        debouncer=Debouncer(0, timer_factory=ImmediateTimer),
    )
    try:
        controller.mount()
        if args.per_page != PAGINATION_SIZES[0]:
            controller.set_per_page(args.per_page)
        if args.search:
            controller.set_search_term(args.search)
        if args.page != 1:
            controller.set_go_to_page_text(str(args.page))
            controller.submit_go_to_page()

        state = controller.state
        if state.go_to_page_error:
            LOGGER.error("❌ %s", state.go_to_page_error)
            return 2
        if state.status is ViewStatus.ERROR:
            LOGGER.error("❌ 用户列表加载失败, 请检查服务地址 %s", args.base_url)
            return 1

        if args.sort != state.sort_key:
            controller.toggle_sort(args.sort)
        if controller.state.sort_order != args.order:
            controller.toggle_sort(args.sort)

        LOGGER.info("%-6s %-28s %-40s %s", "ID", "Name", "Email", "Registration Date")
        for user in controller.sorted_users():
            LOGGER.info(
                "%-6s %-28s %-40s %s",
                user.id,
                user.name,
                user.email,
                format_registration_date(user.created_at),
            )
        LOGGER.info("")
        LOGGER.info("%s | %s", controller.page_label(), controller.range_label())
    finally:
        controller.close()
        api.close()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
