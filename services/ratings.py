"""
Rating aggregation: the one-rating-per-user-per-store upsert, store averages
and the rating list a store owner sees.
"""
from __future__ import annotations

import logging

from psycopg import AsyncConnection
from psycopg import errors as pg_errors

from errors import NotFound
from services.query_filters import build_user_stores_query
from services.validation import check_rating

logger = logging.getLogger(__name__)

UPSERT_RATING_SQL = """
    INSERT INTO ratings (user_id, store_id, rating)
    VALUES (%s, %s, %s)
    ON CONFLICT (user_id, store_id)
    DO UPDATE SET rating = EXCLUDED.rating, updated_at = NOW()
"""


async def submit_rating(conn: AsyncConnection, user_id: int, store_id: int, value: int) -> None:
    """
    Insert the caller's rating for a store, or overwrite the one already there.

    The unique (user_id, store_id) constraint does the conflict detection, so
    there is no read-then-write window between two concurrent submissions.
    """
    check_rating(value)
    try:
        async with conn.cursor() as cur:
            await cur.execute(UPSERT_RATING_SQL, (user_id, store_id, value))
    except pg_errors.ForeignKeyViolation as e:
        raise NotFound("Store not found") from e
    logger.info("Rating saved user_id=%s store_id=%s rating=%s", user_id, store_id, value)


async def average_rating(conn: AsyncConnection, store_id: int) -> float:
    async with conn.cursor() as cur:
        await cur.execute(
            "SELECT COALESCE(AVG(rating), 0) AS average FROM ratings WHERE store_id = %s",
            (store_id,),
        )
        row = await cur.fetchone()
    return float(row["average"]) if row else 0.0


def format_average(value) -> str:
    """Two-decimal display form, e.g. 4.5 -> "4.50"."""
    return f"{float(value):.2f}"


async def ratings_for_store(conn: AsyncConnection, store_id: int) -> list[dict]:
    async with conn.cursor() as cur:
        await cur.execute(
            """
            SELECT u.name, u.email, r.rating, r.created_at
            FROM ratings r
            JOIN users u ON r.user_id = u.id
            WHERE r.store_id = %s
            ORDER BY r.created_at DESC
            """,
            (store_id,),
        )
        return await cur.fetchall()


async def owned_store(conn: AsyncConnection, owner_id: int) -> dict | None:
    """The store a store_owner manages; the lowest id wins if there are several."""
    async with conn.cursor() as cur:
        await cur.execute(
            "SELECT id, name FROM stores WHERE owner_id = %s ORDER BY id LIMIT 1",
            (owner_id,),
        )
        return await cur.fetchone()


async def list_stores_for_user(conn: AsyncConnection, user_id: int, **filters) -> list[dict]:
    """Store list for a rater: overall average plus the caller's own rating."""
    sql, params = build_user_stores_query(user_id, **filters)
    async with conn.cursor() as cur:
        await cur.execute(sql, params)
        return await cur.fetchall()
