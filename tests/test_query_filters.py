import pytest

from services.query_filters import (
    build_stores_query,
    build_user_stores_query,
    build_users_query,
    order_by_clause,
    USER_SORT_COLUMNS,
)
from tests.fakes import normalize_sql


def test_no_filters_lists_everything_unsorted():
    sql, params = build_users_query()

    assert normalize_sql(sql) == "SELECT id, name, email, address, role, created_at FROM users WHERE 1=1"
    assert params == []


def test_filter_values_are_bound_never_inlined():
    hostile = "x' OR '1'='1"
    sql, params = build_users_query(name=hostile, email="@example.com", address="Main")

    assert hostile not in sql
    assert params == [f"%{hostile}%", "%@example.com%", "%Main%"]
    assert sql.count("ILIKE %s") == 3


@pytest.mark.parametrize("column", ["password", "id; DROP TABLE users", "NAME", ""])
def test_unknown_sort_column_is_skipped(column):
    sql, _ = build_users_query(sort_by=column, sort_order="desc")

    assert "ORDER BY" not in sql


@pytest.mark.parametrize(
    "sort_order, direction",
    [("desc", "DESC"), ("asc", "ASC"), ("DESC", "ASC"), (None, "ASC"), ("desc; --", "ASC")],
)
def test_only_literal_desc_sorts_descending(sort_order, direction):
    assert order_by_clause(USER_SORT_COLUMNS, "name", sort_order) == f" ORDER BY name {direction}"


def test_store_query_groups_before_ordering():
    sql, params = build_stores_query(email="shop", sort_by="rating", sort_order="desc")
    sql = normalize_sql(sql)

    assert "LEFT JOIN ratings r ON s.id = r.store_id" in sql
    assert sql.index("s.email ILIKE %s") < sql.index("GROUP BY s.id, s.name, s.email, s.address")
    assert sql.endswith("ORDER BY rating DESC")
    assert params == ["%shop%"]


def test_store_query_rejects_user_only_sort_column():
    sql, _ = build_stores_query(sort_by="overallRating")

    assert "ORDER BY" not in sql


def test_user_store_query_binds_caller_first():
    sql, params = build_user_stores_query(12, address="Harbour")
    sql = normalize_sql(sql)

    assert "LEFT JOIN ratings ur ON s.id = ur.store_id AND ur.user_id = %s" in sql
    assert 'ur.rating AS "userRating"' in sql
    assert "GROUP BY s.id, s.name, s.address, ur.rating" in sql
    assert params == [12, "%Harbour%"]


def test_user_store_query_sorts_by_quoted_alias():
    sql, _ = build_user_stores_query(12, sort_by="overallRating")

    assert sql.endswith(' ORDER BY "overallRating" ASC')
