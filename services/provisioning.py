"""Admin-side account and store management."""
from __future__ import annotations

import logging

from psycopg import AsyncConnection
from psycopg import errors as pg_errors

from errors import DuplicateEmail, NotFound
from services.auth import hash_password
from services.query_filters import build_stores_query, build_users_query
from services.validation import (
    ADMIN_USER_NAME,
    ADMIN_USER_PASSWORD,
    STORE_NAME,
    check_address,
    check_role,
)

logger = logging.getLogger(__name__)


async def dashboard(conn: AsyncConnection) -> dict:
    async with conn.cursor() as cur:
        await cur.execute(
            """
            SELECT
                (SELECT COUNT(*) FROM users)   AS "totalUsers",
                (SELECT COUNT(*) FROM stores)  AS "totalStores",
                (SELECT COUNT(*) FROM ratings) AS "totalRatings"
            """
        )
        return await cur.fetchone()


async def list_users(conn: AsyncConnection, **filters) -> list[dict]:
    sql, params = build_users_query(**filters)
    async with conn.cursor() as cur:
        await cur.execute(sql, params)
        return await cur.fetchall()


async def list_stores(conn: AsyncConnection, **filters) -> list[dict]:
    sql, params = build_stores_query(**filters)
    async with conn.cursor() as cur:
        await cur.execute(sql, params)
        return await cur.fetchall()


async def user_details(conn: AsyncConnection, user_id: int) -> dict:
    async with conn.cursor() as cur:
        await cur.execute(
            "SELECT id, name, email, address, role FROM users WHERE id = %s",
            (user_id,),
        )
        user = await cur.fetchone()
        if not user:
            raise NotFound("User not found")

        if user["role"] == "store_owner":
            await cur.execute(
                """
                SELECT s.id, s.name, COALESCE(AVG(r.rating), 0)::float AS rating
                FROM stores s
                LEFT JOIN ratings r ON s.id = r.store_id
                WHERE s.owner_id = %s
                GROUP BY s.id, s.name
                """,
                (user_id,),
            )
            user = {**user, "stores": await cur.fetchall()}

    return user


async def add_user(
    conn: AsyncConnection,
    name: str,
    email: str,
    password: str,
    role: str,
    address: str | None = None,
) -> int:
    ADMIN_USER_NAME.check(name)
    check_address(address)
    ADMIN_USER_PASSWORD.check(password)
    check_role(role)

    try:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                INSERT INTO users (name, email, password, address, role)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING id
                """,
                (name, email, hash_password(password), address, role),
            )
            row = await cur.fetchone()
    except pg_errors.UniqueViolation as e:
        raise DuplicateEmail() from e

    logger.info("Admin created user_id=%s role=%s", row["id"], role)
    return row["id"]


async def resolve_owner_id(conn: AsyncConnection, owner_email: str | None) -> int | None:
    """Id of the store_owner with this email, or None when there is no such owner."""
    if not owner_email:
        return None
    async with conn.cursor() as cur:
        await cur.execute(
            "SELECT id FROM users WHERE email = %s AND role = 'store_owner'",
            (owner_email,),
        )
        owner = await cur.fetchone()
    if not owner:
        logger.info("Owner email %s did not resolve to a store_owner; store left unowned", owner_email)
        return None
    return owner["id"]


async def add_store(
    conn: AsyncConnection,
    name: str,
    email: str,
    address: str | None = None,
    owner_email: str | None = None,
) -> int:
    STORE_NAME.check(name)
    check_address(address)

    owner_id = await resolve_owner_id(conn, owner_email)
    try:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                INSERT INTO stores (name, email, address, owner_id)
                VALUES (%s, %s, %s, %s)
                RETURNING id
                """,
                (name, email, address, owner_id),
            )
            row = await cur.fetchone()
    except pg_errors.UniqueViolation as e:
        raise DuplicateEmail() from e

    logger.info("Admin created store_id=%s owner_id=%s", row["id"], owner_id)
    return row["id"]
