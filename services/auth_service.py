from __future__ import annotations

import logging
from typing import Any, Dict

from psycopg import AsyncConnection
from psycopg import errors as pg_errors

from errors import DuplicateEmail, InvalidCredentials, NotFound
from services.auth import create_access_token, hash_password, verify_password
from services.validation import SIGNUP_NAME, SIGNUP_PASSWORD, check_address

logger = logging.getLogger(__name__)

# checked when the email is unknown, so both login failures cost one bcrypt check
_DUMMY_HASH = hash_password("unused-Dummy@1")


def user_summary(user: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": user["id"],
        "name": user["name"],
        "email": user["email"],
        "role": user["role"],
        "address": user.get("address"),
    }


def _session(user: Dict[str, Any]) -> Dict[str, Any]:
    token = create_access_token(user["id"], user["email"], user["role"])
    return {"token": token, "user": user_summary(user)}


async def login(conn: AsyncConnection, email: str, password: str) -> Dict[str, Any]:
    """
    Check an email/password pair and open a session.

    Unknown email and wrong password raise the same InvalidCredentials so the
    response does not reveal which accounts exist.
    """
    async with conn.cursor() as cur:
        await cur.execute(
            "SELECT id, name, email, password, address, role FROM users WHERE email = %s",
            (email,),
        )
        user = await cur.fetchone()

    password_hash = user["password"] if user else _DUMMY_HASH
    if not verify_password(password, password_hash) or not user:
        logger.warning("Login failed for email=%s", email)
        raise InvalidCredentials()

    logger.info("Login ok user_id=%s role=%s", user["id"], user["role"])
    return _session(user)


async def signup(
    conn: AsyncConnection,
    name: str,
    email: str,
    password: str,
    address: str | None = None,
) -> Dict[str, Any]:
    SIGNUP_NAME.check(name)
    check_address(address)
    SIGNUP_PASSWORD.check(password)

    async with conn.cursor() as cur:
        await cur.execute("SELECT id FROM users WHERE email = %s", (email,))
        if await cur.fetchone():
            raise DuplicateEmail()

        try:
            await cur.execute(
                """
                INSERT INTO users (name, email, password, address, role)
                VALUES (%s, %s, %s, %s, 'user')
                RETURNING id
                """,
                (name, email, hash_password(password), address),
            )
        except pg_errors.UniqueViolation as e:
            # lost a race with another signup for the same email
            raise DuplicateEmail() from e
        row = await cur.fetchone()

    logger.info("Signup user_id=%s", row["id"])
    return _session({"id": row["id"], "name": name, "email": email, "role": "user", "address": address})


async def change_password(conn: AsyncConnection, user_id: int, old_password: str, new_password: str) -> str:
    SIGNUP_PASSWORD.check(new_password)

    async with conn.cursor() as cur:
        await cur.execute("SELECT password FROM users WHERE id = %s", (user_id,))
        user = await cur.fetchone()
        if not user:
            raise NotFound("User not found")
        if not verify_password(old_password, user["password"]):
            raise InvalidCredentials("Current password is incorrect")

        await cur.execute(
            "UPDATE users SET password = %s WHERE id = %s",
            (hash_password(new_password), user_id),
        )

    logger.info("Password changed user_id=%s", user_id)
    return "Password updated successfully"
