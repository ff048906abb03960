#!/usr/bin/env python3
"""Create the first admin account, or reset its password if it already exists."""
from __future__ import annotations

import argparse
import logging

import psycopg

from config import DATABASE_URL
from errors import AppError
from init_db import init_database
from logging_setup import configure_logging
from services.auth import hash_password
from services.validation import check_address

logger = logging.getLogger("create_admin")

UPSERT_ADMIN_SQL = """
    INSERT INTO users (name, email, password, address, role)
    VALUES (%s, %s, %s, %s, 'admin')
    ON CONFLICT (email) DO UPDATE SET password = EXCLUDED.password
    RETURNING id, (xmax = 0) AS created
"""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or reset the admin account.")
    parser.add_argument("--email", default="admin@example.com", help="Admin email")
    parser.add_argument("--password", required=True, help="Admin password")
    parser.add_argument("--name", default="Admin User", help="Admin display name")
    parser.add_argument("--address", default=None, help="Admin address")
    parser.add_argument("--database-url", default=DATABASE_URL, help="libpq connection string")
    return parser.parse_args(argv)


def upsert_admin(conninfo: str, name: str, email: str, password: str, address: str | None) -> tuple[int, bool]:
    check_address(address)
    with psycopg.connect(conninfo) as conn:
        with conn.cursor() as cur:
            cur.execute(UPSERT_ADMIN_SQL, (name, email, hash_password(password), address))
            admin_id, created = cur.fetchone()
        conn.commit()
    return admin_id, created


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = parse_args(argv)

    try:
        init_database(args.database_url)
        admin_id, created = upsert_admin(args.database_url, args.name, args.email, args.password, args.address)
    except (psycopg.Error, AppError) as exc:
        logger.error("Admin bootstrap failed: %s", exc)
        return 1

    action = "created" if created else "updated"
    logger.info("Admin %s: id=%s email=%s", action, admin_id, args.email)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
