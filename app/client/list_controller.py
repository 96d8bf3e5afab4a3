"""用户列表控制器(客户端).

以单个 `ClientViewState` 驱动列表视图: 首次加载、搜索防抖、翻页、每页条数切换、
当前页排序. 请求在独立的执行器上运行, 状态修改由锁保护; 每个请求分配递增序号,
只有最新请求的响应会写回状态.

状态流转: idle -> loading -> loaded, 请求失败进入 error(仅记录日志, 保留上次数据).
"""

from __future__ import annotations

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Protocol

from app.client.debounce import Debouncer
from app.client.formatting import page_label, range_label
from app.client.sorting import DEFAULT_SORT_KEY, DEFAULT_SORT_ORDER, SORT_KEYS, next_sort, sort_users
from app.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, PAGINATION_SIZES, PAGINATION_WINDOW_RADIUS, ErrorMessages
from app.core.exceptions import TransportError
from app.core.types.listing import Page, PageMeta
from app.core.types.users import SortKey, SortOrder, UserListItem
from app.schemas.query_parsers import parse_optional_int
from app.utils.structlog_config import get_client_logger


class UsersFetcher(Protocol):
    def fetch_users(self, page: int, limit: int, search: str = "") -> Page[UserListItem]: ...


class ViewStatus(Enum):
    """列表视图状态."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class ClientViewState:
    """列表视图的全部可变状态."""

    users: list[UserListItem] = field(default_factory=list)
    meta: PageMeta = field(default_factory=PageMeta)
    loading: bool = False
    go_to_page: str = ""
    go_to_page_error: str = ""
    per_page: int = DEFAULT_PAGE_SIZE
    sort_key: SortKey = DEFAULT_SORT_KEY
    sort_order: SortOrder = DEFAULT_SORT_ORDER
    search_term: str = ""
    status: ViewStatus = ViewStatus.IDLE
    request_seq: int = 0


class UserListController:
    """用户列表控制器."""

    def __init__(
        self,
        fetcher: UsersFetcher,
        *,
        executor: Executor | None = None,
        debouncer: Debouncer | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="users-client")
        self._debouncer = debouncer or Debouncer()
        self._state = ClientViewState()
        self._lock = threading.Lock()
        self._logger = get_client_logger()
        self._closed = False

    # ------------------------------------------------------------------
    # 状态读取
    # ------------------------------------------------------------------
    @property
    def state(self) -> ClientViewState:
        """返回状态快照(副本), 调用方修改不会影响控制器."""
        with self._lock:
            return replace(self._state, users=list(self._state.users))

    @property
    def status(self) -> ViewStatus:
        with self._lock:
            return self._state.status

    def sorted_users(self) -> list[UserListItem]:
        """按当前排序列与方向返回当前页用户, 不触发请求."""
        with self._lock:
            users = list(self._state.users)
            key, order = self._state.sort_key, self._state.sort_order
        return sort_users(users, key, order)

    def pagination_range(self) -> list[int]:
        """页码按钮窗口: current-2 .. current+2, 截断到 [1, last_page]."""
        with self._lock:
            meta = self._state.meta
        start = max(meta.current_page - PAGINATION_WINDOW_RADIUS, 1)
        end = min(meta.current_page + PAGINATION_WINDOW_RADIUS, meta.last_page)
        return list(range(start, end + 1))

    def page_label(self) -> str:
        with self._lock:
            return page_label(self._state.meta)

    def range_label(self) -> str:
        with self._lock:
            return range_label(self._state.meta)

    # ------------------------------------------------------------------
    # 用户动作
    # ------------------------------------------------------------------
    def mount(self) -> Future[None]:
        """首次加载: 第 1 页, 每页 10 条, 无搜索."""
        return self._fetch(DEFAULT_PAGE, DEFAULT_PAGE_SIZE, "")

    def set_search_term(self, term: str) -> None:
        """更新搜索词并(重新)安排防抖请求."""
        with self._lock:
            self._state.search_term = term
        self._debouncer.schedule(self._on_search_settled)

    def clear_search(self) -> None:
        self.set_search_term("")

    def go_first(self) -> Future[None] | None:
        return self.go_to(1)

    def go_previous(self) -> Future[None] | None:
        with self._lock:
            target = self._state.meta.current_page - 1
        return self.go_to(target)

    def go_next(self) -> Future[None] | None:
        with self._lock:
            target = self._state.meta.current_page + 1
        return self.go_to(target)

    def go_last(self) -> Future[None] | None:
        with self._lock:
            target = self._state.meta.last_page
        return self.go_to(target)

    def go_to(self, page: int) -> Future[None] | None:
        """请求指定页; 超出 [1, last_page] 或控制器已关闭时忽略并返回 None."""
        with self._lock:
            if self._closed:
                return None
            last_page = self._state.meta.last_page
            per_page = self._state.per_page
            search = self._state.search_term
        if not 1 <= page <= last_page:
            return None
        return self._fetch(page, per_page, search)

    def set_go_to_page_text(self, text: str) -> None:
        with self._lock:
            self._state.go_to_page = text

    def submit_go_to_page(self) -> Future[None] | None:
        """提交跳页输入; 非法输入写入 go_to_page_error 且不发请求."""
        with self._lock:
            text = self._state.go_to_page
            last_page = self._state.meta.last_page
            try:
                page = parse_optional_int(text, field="page")
            except ValueError:
                page = None
            if page is None or not 1 <= page <= last_page:
                self._state.go_to_page_error = ErrorMessages.GO_TO_PAGE_OUT_OF_RANGE.format(last_page=last_page)
                return None
            self._state.go_to_page = ""
            self._state.go_to_page_error = ""
        return self.go_to(page)

    def set_per_page(self, per_page: int) -> Future[None] | None:
        """切换每页条数并立即请求第 1 页."""
        if per_page not in PAGINATION_SIZES:
            raise ValueError(f"每页条数仅支持 {', '.join(map(str, PAGINATION_SIZES))}")
        with self._lock:
            self._state.per_page = per_page
        return self.go_to(1)

    def toggle_sort(self, key: SortKey) -> None:
        """点击列头: 同列切换方向, 换列则升序. 不触发请求."""
        if key not in SORT_KEYS:
            raise ValueError(f"不支持的排序列: {key}")
        with self._lock:
            self._state.sort_key, self._state.sort_order = next_sort(
                self._state.sort_key,
                self._state.sort_order,
                key,
            )

    def close(self) -> None:
        """取消待触发的搜索并关闭自有执行器. 之后到期的搜索不再发请求."""
        with self._lock:
            self._closed = True
        self._debouncer.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    # ------------------------------------------------------------------
    # 内部实现
    # ------------------------------------------------------------------
    def _on_search_settled(self) -> None:
        # 计时器可能在 close() 之前已进入回调
        with self._lock:
            if self._closed:
                return
        self.go_to(1)

    def _fetch(self, page: int, limit: int, search: str) -> Future[None]:
        with self._lock:
            self._state.request_seq += 1
            seq = self._state.request_seq
            self._state.loading = True
            self._state.status = ViewStatus.LOADING
        return self._executor.submit(self._run_fetch, seq, page, limit, search)

    def _run_fetch(self, seq: int, page: int, limit: int, search: str) -> None:
        try:
            result = self._fetcher.fetch_users(page, limit, search)
        except TransportError as exc:
            with self._lock:
                is_latest = seq == self._state.request_seq
                if is_latest:
                    self._state.loading = False
                    self._state.status = ViewStatus.ERROR
            self._logger.warning(
                "用户列表加载失败",
                module="client",
                page=page,
                limit=limit,
                status_code=exc.status_code,
                error=exc.message,
                stale=not is_latest,
            )
            return
        except Exception:
            with self._lock:
                is_latest = seq == self._state.request_seq
                if is_latest:
                    self._state.loading = False
                    self._state.status = ViewStatus.ERROR
            self._logger.exception(
                "用户列表加载异常",
                module="client",
                page=page,
                limit=limit,
                stale=not is_latest,
            )
            return

        with self._lock:
            if seq != self._state.request_seq:
                stale = True
            else:
                stale = False
                self._state.users = list(result.data)
                self._state.meta = result.meta
                self._state.loading = False
                self._state.status = ViewStatus.LOADED
        if stale:
            self._logger.debug("丢弃过期的用户列表响应", module="client", seq=seq)


__all__ = ["ClientViewState", "UserListController", "UsersFetcher", "ViewStatus"]
