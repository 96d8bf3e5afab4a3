# tests/unit/client/conftest.py
"""客户端测试专用 fakes: 同步执行器、手动定时器与可编程的 fetcher."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Executor, Future

import pytest

from app.client.debounce import Debouncer
from app.core.types.listing import Page
from app.core.types.users import UserListItem
from app.services.users.pagination_responder import build_page_meta


class ImmediateExecutor(Executor):
    """在调用线程内立即执行任务."""

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class DeferredExecutor(Executor):
    """暂存任务, 由测试决定执行顺序(用于模拟响应乱序)."""

    def __init__(self) -> None:
        self.pending: list[tuple[Future, Callable[[], object]]] = []

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        self.pending.append((future, lambda: fn(*args, **kwargs)))
        return future

    def run(self, index: int) -> None:
        future, task = self.pending[index]
        future.set_result(task())


class ManualTimer:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class ManualTimerFactory:
    def __init__(self) -> None:
        self.timers: list[ManualTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> ManualTimer:
        return self.timers[-1]


class FakeFetcher:
    """按 (page, limit, search) 记录调用, 根据内存中的用户表生成分页结果."""

    def __init__(self, total: int = 50) -> None:
        self.users = [
            UserListItem(
                id=index,
                name=f"User {index:02d}",
                email=f"user{index:02d}@example.com",
                created_at="2025-01-01T00:00:00+00:00",
            )
            for index in range(1, total + 1)
        ]
        self.calls: list[tuple[int, int, str]] = []
        self.fail_with: Exception | None = None

    def fetch_users(self, page: int, limit: int, search: str = "") -> Page[UserListItem]:
        self.calls.append((page, limit, search))
        if self.fail_with is not None:
            raise self.fail_with
        matched = [user for user in self.users if not search or search.lower() in user.name.lower()]
        items = matched[(page - 1) * limit : page * limit]
        meta = build_page_meta(total=len(matched), page=page, limit=limit, item_count=len(items))
        return Page(data=items, meta=meta)


@pytest.fixture
def timer_factory() -> ManualTimerFactory:
    return ManualTimerFactory()


@pytest.fixture
def debouncer(timer_factory) -> Debouncer:
    return Debouncer(0.6, timer_factory=timer_factory)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def immediate_executor() -> ImmediateExecutor:
    return ImmediateExecutor()


@pytest.fixture
def deferred_executor() -> DeferredExecutor:
    return DeferredExecutor()
