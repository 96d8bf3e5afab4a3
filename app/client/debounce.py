"""搜索输入防抖.

每个控制器持有一个 `Debouncer`, 同一时刻最多只有一个待触发的定时任务:
新的 `schedule` 会取消尚未触发的旧任务, 只有最后一次输入会真正触发回调.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Protocol

from app.constants import SEARCH_DEBOUNCE_SECONDS


class CancellableTimer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], CancellableTimer]


def _thread_timer(delay: float, callback: Callable[[], None]) -> CancellableTimer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


class Debouncer:
    """单实例可取消的延迟任务(trailing debounce)."""

    def __init__(
        self,
        delay: float = SEARCH_DEBOUNCE_SECONDS,
        *,
        timer_factory: TimerFactory = _thread_timer,
    ) -> None:
        self.delay = delay
        self._timer_factory = timer_factory
        self._timer: CancellableTimer | None = None
        self._lock = threading.RLock()

    @property
    def pending(self) -> bool:
        """是否存在尚未触发的任务."""
        with self._lock:
            return self._timer is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        """取消旧任务并在 `delay` 秒后执行 callback."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer: CancellableTimer | None = None

            def _fire() -> None:
                with self._lock:
                    # 已被新任务替换或已取消
                    if self._timer is not timer:
                        return
                    self._timer = None
                callback()

            timer = self._timer_factory(self.delay, _fire)
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        """取消尚未触发的任务(若有)."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
