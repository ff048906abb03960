"""
Build the list queries behind the admin and user tables.

Every filter value travels as a bound parameter. The only text spliced into the
SQL is a sort column picked from a fixed allow-list and a literal ASC/DESC.
"""
from __future__ import annotations

from typing import Mapping

# sortBy value from the client -> SQL expression it is allowed to produce
USER_SORT_COLUMNS = {
    "name": "name",
    "email": "email",
    "address": "address",
    "role": "role",
    "created_at": "created_at",
}
STORE_SORT_COLUMNS = {
    "name": "s.name",
    "email": "s.email",
    "address": "s.address",
    "rating": "rating",
}
USER_STORE_SORT_COLUMNS = {
    "name": "s.name",
    "address": "s.address",
    "overallRating": '"overallRating"',
}

Query = tuple[str, list]


def like_pattern(value: str) -> str:
    return f"%{value}%"


def order_by_clause(allowed: Mapping[str, str], sort_by: str | None, sort_order: str | None) -> str:
    """
    Return " ORDER BY <col> ASC|DESC", or "" when sort_by is missing or not in
    the allow-list. Only the exact string "desc" sorts descending.
    """
    if not sort_by or sort_by not in allowed:
        return ""
    direction = "DESC" if sort_order == "desc" else "ASC"
    return f" ORDER BY {allowed[sort_by]} {direction}"


def _substring_filters(filters: Mapping[str, str | None], columns: Mapping[str, str]) -> tuple[str, list]:
    sql = ""
    params: list = []
    for field, column in columns.items():
        value = filters.get(field)
        if value:
            sql += f" AND {column} ILIKE %s"
            params.append(like_pattern(value))
    return sql, params


def build_users_query(
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    role: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> Query:
    sql = "SELECT id, name, email, address, role, created_at FROM users WHERE 1=1"
    where, params = _substring_filters(
        {"name": name, "email": email, "address": address},
        {"name": "name", "email": "email", "address": "address"},
    )
    sql += where
    if role:
        # role is an enum, matched exactly
        sql += " AND role = %s"
        params.append(role)
    sql += order_by_clause(USER_SORT_COLUMNS, sort_by, sort_order)
    return sql, params


def build_stores_query(
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> Query:
    sql = """
        SELECT s.id, s.name, s.email, s.address,
               COALESCE(AVG(r.rating), 0)::float AS rating
        FROM stores s
        LEFT JOIN ratings r ON s.id = r.store_id
        WHERE 1=1
    """
    where, params = _substring_filters(
        {"name": name, "email": email, "address": address},
        {"name": "s.name", "email": "s.email", "address": "s.address"},
    )
    sql += where
    sql += " GROUP BY s.id, s.name, s.email, s.address"
    sql += order_by_clause(STORE_SORT_COLUMNS, sort_by, sort_order)
    return sql, params


def build_user_stores_query(
    user_id: int,
    name: str | None = None,
    address: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> Query:
    """Store list for a rater: overall average plus the caller's own rating."""
    sql = """
        SELECT s.id, s.name, s.address,
               COALESCE(AVG(r.rating), 0)::float AS "overallRating",
               ur.rating AS "userRating"
        FROM stores s
        LEFT JOIN ratings r ON s.id = r.store_id
        LEFT JOIN ratings ur ON s.id = ur.store_id AND ur.user_id = %s
        WHERE 1=1
    """
    params: list = [user_id]
    where, filter_params = _substring_filters(
        {"name": name, "address": address},
        {"name": "s.name", "address": "s.address"},
    )
    sql += where
    params += filter_params
    sql += " GROUP BY s.id, s.name, s.address, ur.rating"
    sql += order_by_clause(USER_STORE_SORT_COLUMNS, sort_by, sort_order)
    return sql, params
