import pytest

from app.core.types.users import ListQuery
from app.repositories.users_repository import UsersRepository, parse_search_id


@pytest.mark.unit
@pytest.mark.parametrize(
    ("search", "expected"),
    [
        ("42", 42),
        ("0", 0),
        ("007", 7),
        ("-1", None),
        ("4a", None),
        ("١٢", None),
        (str(2**31 - 1), 2**31 - 1),
        (str(2**31), None),
        (str(2**63), None),
    ],
)
def test_parse_search_id(search: str, expected: int | None) -> None:
    assert parse_search_id(search) == expected


@pytest.mark.unit
def test_list_users_without_search_orders_by_id_and_paginates(seed_users) -> None:
    seed_users(12)
    repository = UsersRepository()

    first = repository.list_users(ListQuery(page=1, limit=5))
    last = repository.list_users(ListQuery(page=3, limit=5))

    assert [user.id for user in first.items] == [1, 2, 3, 4, 5]
    assert [user.id for user in last.items] == [11, 12]
    assert first.total == last.total == 12
    assert (last.page, last.limit) == (3, 5)


@pytest.mark.unit
def test_list_users_pages_cover_every_user_once(seed_users) -> None:
    seed_users(23)
    repository = UsersRepository()

    seen: list[int] = []
    for page in range(1, 4):
        raw = repository.list_users(ListQuery(page=page, limit=10))
        assert len(raw.items) <= 10
        seen.extend(user.id for user in raw.items)

    assert seen == list(range(1, 24))


@pytest.mark.unit
def test_list_users_search_is_case_insensitive_over_name_and_email(seed_users) -> None:
    seed_users(rows=[("Anna", "a@x.com"), ("Bob", "ANN@x.com"), ("Carl", "c@x.com")])

    raw = UsersRepository().list_users(ListQuery(limit=10, search="aNn"))

    assert [user.name for user in raw.items] == ["Anna", "Bob"]
    assert raw.total == 2


@pytest.mark.unit
def test_list_users_numeric_search_matches_id_or_text(seed_users) -> None:
    seed_users(rows=[("Anna", "a@x.com"), ("Bob", "b@x.com"), ("Carl 1", "c@x.com")])

    raw = UsersRepository().list_users(ListQuery(limit=10, search="1"))

    # id == 1 或 name 中包含 "1"
    assert [user.id for user in raw.items] == [1, 3]


@pytest.mark.unit
def test_list_users_numeric_search_beyond_id_range_matches_text_only(seed_users) -> None:
    too_big = str(2**31)
    seed_users(rows=[("Anna", "a@x.com"), ("Bob", f"b{too_big}@x.com")])

    raw = UsersRepository().list_users(ListQuery(limit=10, search=too_big))

    assert [user.name for user in raw.items] == ["Bob"]


@pytest.mark.unit
def test_list_users_search_treats_wildcards_literally(seed_users) -> None:
    seed_users(rows=[("100% Anna", "a@x.com"), ("Bob", "b@x.com"), ("c_d", "cd@x.com"), ("cxd", "cxd@x.com")])
    repository = UsersRepository()

    percent = repository.list_users(ListQuery(limit=10, search="%"))
    underscore = repository.list_users(ListQuery(limit=10, search="c_d"))

    assert [user.name for user in percent.items] == ["100% Anna"]
    assert [user.name for user in underscore.items] == ["c_d"]


@pytest.mark.unit
def test_list_users_page_beyond_range_keeps_total(seed_users) -> None:
    seed_users(3)

    raw = UsersRepository().list_users(ListQuery(page=5, limit=2))

    assert raw.items == []
    assert raw.total == 3


@pytest.mark.unit
def test_count_users(seed_users) -> None:
    assert UsersRepository.count_users() == 0
    seed_users(4)
    assert UsersRepository.count_users() == 4
