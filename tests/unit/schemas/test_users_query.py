import pytest

from app.core.exceptions import ValidationError
from app.core.types.users import ListQuery
from app.schemas.users_query import UserListQuery, validate_list_query
from app.schemas.validation import validate_or_raise


def _count(total: int):
    calls: list[int] = []

    def _count_users() -> int:
        calls.append(total)
        return total

    _count_users.calls = calls  # type: ignore[attr-defined]
    return _count_users


@pytest.mark.unit
def test_validate_list_query_defaults() -> None:
    query = validate_list_query({}, count_users=_count(50))

    assert query == ListQuery(page=1, limit=10, search=None)


@pytest.mark.unit
def test_validate_list_query_parses_query_string_values() -> None:
    query = validate_list_query({"page": "3", "limit": "25", "search": "  ann "}, count_users=_count(100))

    assert query.page == 3
    assert query.limit == 25
    assert query.search == "ann"


@pytest.mark.unit
def test_validate_list_query_treats_blank_values_as_absent() -> None:
    query = validate_list_query({"page": "", "limit": " ", "search": ""}, count_users=_count(10))

    assert query == ListQuery(page=1, limit=10, search=None)


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["abc", "1.5", "1e3", True])
def test_validate_list_query_rejects_non_integer_page(raw) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_list_query({"page": raw}, count_users=_count(50))

    assert excinfo.value.field_errors == {"page": ["The page field must be an integer."]}


@pytest.mark.unit
def test_validate_list_query_rejects_values_below_one() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_list_query({"page": "0", "limit": "-5"}, count_users=_count(50))

    assert excinfo.value.field_errors == {
        "page": ["The page field must be at least 1."],
        "limit": ["The limit field must be at least 1."],
    }


@pytest.mark.unit
def test_validate_list_query_limit_cannot_exceed_total() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_list_query({"limit": "100"}, count_users=_count(42))

    assert excinfo.value.field_errors == {
        "limit": ["Users per page cannot be greater than total number of users (42)."],
    }
    assert str(excinfo.value) == "Users per page cannot be greater than total number of users (42)."


@pytest.mark.unit
def test_validate_list_query_default_limit_against_empty_table() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_list_query({}, count_users=_count(0))

    assert excinfo.value.field_errors == {
        "limit": ["Users per page cannot be greater than total number of users (0)."],
    }


@pytest.mark.unit
def test_validate_list_query_skips_total_check_for_invalid_limit() -> None:
    count_users = _count(5)

    with pytest.raises(ValidationError) as excinfo:
        validate_list_query({"limit": "lots"}, count_users=count_users)

    assert excinfo.value.field_errors == {"limit": ["The limit field must be an integer."]}
    assert count_users.calls == []


@pytest.mark.unit
def test_validate_list_query_rejects_non_string_search() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_list_query({"search": 123}, count_users=_count(50))

    assert excinfo.value.field_errors == {"search": ["The search field must be a string."]}


@pytest.mark.unit
def test_validate_list_query_ignores_unknown_keys() -> None:
    query = validate_list_query({"sort": "name", "order": "desc"}, count_users=_count(50))

    assert query == ListQuery()


@pytest.mark.unit
def test_user_list_query_without_count_context_skips_total_check() -> None:
    schema = validate_or_raise(UserListQuery, {"limit": "500"})

    assert schema.to_list_query().limit == 500
