import pytest

from app.client.list_controller import UserListController, ViewStatus
from app.core.exceptions import TransportError


@pytest.fixture
def make_controller(fetcher, debouncer, immediate_executor):
    def _make(executor=None) -> UserListController:
        return UserListController(fetcher, executor=executor or immediate_executor, debouncer=debouncer)

    return _make


@pytest.mark.unit
def test_mount_fetches_first_page_with_defaults(make_controller, fetcher) -> None:
    controller = make_controller()

    assert controller.status is ViewStatus.IDLE
    controller.mount()

    state = controller.state
    assert fetcher.calls == [(1, 10, "")]
    assert state.status is ViewStatus.LOADED
    assert state.loading is False
    assert [user.id for user in state.users] == list(range(1, 11))
    assert state.meta.last_page == 5
    assert controller.page_label() == "Page 1 of 5"
    assert controller.range_label() == "1 to 10 of 50 users"


@pytest.mark.unit
def test_fetch_marks_loading_until_response(make_controller, deferred_executor) -> None:
    controller = make_controller(deferred_executor)

    controller.mount()
    assert controller.state.loading is True
    assert controller.status is ViewStatus.LOADING

    deferred_executor.run(0)
    assert controller.state.loading is False
    assert controller.status is ViewStatus.LOADED


@pytest.mark.unit
def test_page_navigation_stays_within_bounds(make_controller, fetcher) -> None:
    controller = make_controller()
    controller.mount()

    assert controller.go_previous() is None
    assert controller.go_to(0) is None
    assert controller.go_to(6) is None
    assert fetcher.calls == [(1, 10, "")]

    controller.go_next()
    controller.go_last()
    assert controller.go_next() is None
    controller.go_previous()
    controller.go_first()

    assert fetcher.calls[1:] == [(2, 10, ""), (5, 10, ""), (4, 10, ""), (1, 10, "")]


@pytest.mark.unit
def test_pagination_range_is_clipped_window(make_controller) -> None:
    controller = make_controller()
    controller.mount()
    assert controller.pagination_range() == [1, 2, 3]

    controller.go_to(3)
    assert controller.pagination_range() == [1, 2, 3, 4, 5]

    controller.go_last()
    assert controller.pagination_range() == [3, 4, 5]


@pytest.mark.unit
def test_go_to_page_out_of_range_sets_error_without_fetch(make_controller, fetcher) -> None:
    controller = make_controller()
    controller.mount()

    controller.set_go_to_page_text("99")
    assert controller.submit_go_to_page() is None

    state = controller.state
    assert state.go_to_page_error == "Enter a number between 1 and 5"
    assert state.go_to_page == "99"
    assert fetcher.calls == [(1, 10, "")]


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "abc", "2.5", "0"])
def test_go_to_page_rejects_non_integer_input(make_controller, fetcher, text) -> None:
    controller = make_controller()
    controller.mount()

    controller.set_go_to_page_text(text)
    controller.submit_go_to_page()

    assert controller.state.go_to_page_error == "Enter a number between 1 and 5"
    assert len(fetcher.calls) == 1


@pytest.mark.unit
def test_go_to_page_valid_input_fetches_and_clears(make_controller, fetcher) -> None:
    controller = make_controller()
    controller.mount()
    controller.set_go_to_page_text("99")
    controller.submit_go_to_page()

    controller.set_go_to_page_text(" 3 ")
    controller.submit_go_to_page()

    state = controller.state
    assert fetcher.calls[-1] == (3, 10, "")
    assert state.go_to_page == ""
    assert state.go_to_page_error == ""
    assert state.meta.current_page == 3


@pytest.mark.unit
def test_set_per_page_refetches_first_page_with_current_search(make_controller, fetcher, timer_factory) -> None:
    controller = make_controller()
    controller.mount()
    controller.set_search_term("user")
    timer_factory.last.fire()
    controller.go_to(2)

    controller.set_per_page(25)

    assert fetcher.calls[-1] == (1, 25, "user")
    assert controller.state.per_page == 25


@pytest.mark.unit
def test_set_per_page_rejects_unsupported_size(make_controller) -> None:
    controller = make_controller()

    with pytest.raises(ValueError):
        controller.set_per_page(7)


@pytest.mark.unit
def test_search_is_debounced_to_last_keystroke(make_controller, fetcher, timer_factory) -> None:
    controller = make_controller()
    controller.mount()
    controller.go_to(3)

    controller.set_search_term("u")
    controller.set_search_term("us")
    controller.set_search_term("user 0")

    assert len(timer_factory.timers) == 3
    assert timer_factory.timers[0].cancelled is True
    assert timer_factory.timers[1].cancelled is True
    assert fetcher.calls[-1] == (3, 10, "")

    timer_factory.last.fire()

    assert fetcher.calls[-1] == (1, 10, "user 0")
    assert controller.state.meta.total == 9


@pytest.mark.unit
def test_clear_search_goes_through_debounce(make_controller, fetcher, timer_factory) -> None:
    controller = make_controller()
    controller.mount()
    controller.set_search_term("user 1")
    timer_factory.last.fire()

    controller.clear_search()
    assert controller.state.search_term == ""
    timer_factory.last.fire()

    assert fetcher.calls[-1] == (1, 10, "")


@pytest.mark.unit
def test_toggle_sort_reorders_current_page_without_fetch(make_controller, fetcher) -> None:
    controller = make_controller()
    controller.mount()
    controller.go_to(3)
    calls_before = list(fetcher.calls)

    controller.toggle_sort("name")
    controller.toggle_sort("name")
    assert (controller.state.sort_key, controller.state.sort_order) == ("name", "desc")
    assert [user.id for user in controller.sorted_users()] == list(range(30, 20, -1))

    controller.toggle_sort("name")
    assert controller.state.sort_order == "asc"
    assert [user.id for user in controller.sorted_users()] == list(range(21, 31))
    assert fetcher.calls == calls_before


@pytest.mark.unit
def test_toggle_sort_new_column_starts_ascending(make_controller) -> None:
    controller = make_controller()

    controller.toggle_sort("id")
    assert controller.state.sort_order == "desc"
    controller.toggle_sort("email")
    assert (controller.state.sort_key, controller.state.sort_order) == ("email", "asc")

    with pytest.raises(ValueError):
        controller.toggle_sort("password")  # type: ignore[arg-type]


@pytest.mark.unit
def test_fetch_failure_keeps_previous_data(make_controller, fetcher) -> None:
    controller = make_controller()
    controller.mount()
    before = controller.state

    fetcher.fail_with = TransportError("boom", status_code=500)
    controller.go_next()

    state = controller.state
    assert state.status is ViewStatus.ERROR
    assert state.loading is False
    assert state.users == before.users
    assert state.meta == before.meta


@pytest.mark.unit
def test_stale_response_is_discarded(make_controller, deferred_executor) -> None:
    controller = make_controller(deferred_executor)
    controller.mount()
    deferred_executor.run(0)

    controller.go_to(2)
    controller.go_to(3)
    # 后发请求先返回, 先发请求的响应随后到达
    deferred_executor.run(2)
    deferred_executor.run(1)

    state = controller.state
    assert state.meta.current_page == 3
    assert [user.id for user in state.users] == list(range(21, 31))
    assert state.request_seq == 3


@pytest.mark.unit
def test_state_snapshot_is_a_copy(make_controller) -> None:
    controller = make_controller()
    controller.mount()

    snapshot = controller.state
    snapshot.users.clear()

    assert len(controller.state.users) == 10


@pytest.mark.unit
def test_close_cancels_pending_search(make_controller, debouncer, timer_factory) -> None:
    controller = make_controller()
    controller.set_search_term("late")

    controller.close()

    assert timer_factory.last.cancelled is True
    assert debouncer.pending is False


@pytest.mark.unit
def test_unexpected_fetch_error_clears_loading(make_controller, fetcher) -> None:
    controller = make_controller()
    controller.mount()
    before = controller.state

    fetcher.fail_with = ConnectionResetError("connection reset by peer")
    future = controller.go_next()

    state = controller.state
    assert future.exception() is None
    assert state.status is ViewStatus.ERROR
    assert state.loading is False
    assert state.users == before.users


@pytest.mark.unit
def test_unexpected_error_from_stale_request_leaves_state(make_controller, fetcher, deferred_executor) -> None:
    controller = make_controller(deferred_executor)
    controller.mount()
    deferred_executor.run(0)

    controller.go_to(2)
    controller.go_to(3)
    deferred_executor.run(2)
    fetcher.fail_with = ConnectionResetError("connection reset by peer")
    deferred_executor.run(1)

    state = controller.state
    assert state.status is ViewStatus.LOADED
    assert state.meta.current_page == 3


@pytest.mark.unit
def test_search_settling_after_close_issues_no_request(fetcher, debouncer) -> None:
    controller = UserListController(fetcher, debouncer=debouncer)
    controller.set_search_term("late")

    controller.close()
    # 回调在 close() 之前已被计时器线程取出
    controller._on_search_settled()

    assert fetcher.calls == []
    assert controller.go_to(1) is None
    assert controller.status is ViewStatus.IDLE
