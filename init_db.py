# init_db.py
import logging

import psycopg

from config import DATABASE_URL

logger = logging.getLogger(__name__)

# IF NOT EXISTS everywhere so this can run on every start
INIT_SQL = """
-- 1. Role enum
DO $$ BEGIN
    IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = 'user_role') THEN
        CREATE TYPE user_role AS ENUM ('admin', 'user', 'store_owner');
    END IF;
END $$;

-- 2. users
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    name VARCHAR(60) NOT NULL,
    email VARCHAR(255) NOT NULL UNIQUE,
    password VARCHAR(255) NOT NULL,   -- bcrypt digest, never plaintext
    address VARCHAR(400),
    role user_role NOT NULL DEFAULT 'user',
    created_at TIMESTAMPTZ DEFAULT NOW()
);

-- 3. stores (owner is optional)
CREATE TABLE IF NOT EXISTS stores (
    id SERIAL PRIMARY KEY,
    name VARCHAR(60) NOT NULL,
    email VARCHAR(255) NOT NULL,
    address VARCHAR(400),
    owner_id INT REFERENCES users(id) ON DELETE SET NULL,
    created_at TIMESTAMPTZ DEFAULT NOW()
);

-- 4. ratings: one row per (user, store)
CREATE TABLE IF NOT EXISTS ratings (
    id SERIAL PRIMARY KEY,
    user_id INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    store_id INT NOT NULL REFERENCES stores(id) ON DELETE CASCADE,
    rating INT NOT NULL CHECK (rating BETWEEN 1 AND 5),
    created_at TIMESTAMPTZ DEFAULT NOW(),
    updated_at TIMESTAMPTZ DEFAULT NOW(),
    UNIQUE (user_id, store_id)
);

CREATE INDEX IF NOT EXISTS idx_stores_owner ON stores(owner_id);
CREATE INDEX IF NOT EXISTS idx_ratings_store ON ratings(store_id);
"""


def init_database(conninfo: str = DATABASE_URL) -> None:
    """
    Create the enum, tables and indexes if they are missing.

    Uses a plain synchronous connection: it runs once, before the pool opens.
    Failures propagate so the server does not start against a broken schema.
    """
    logger.info("Checking database schema")
    with psycopg.connect(conninfo) as conn:
        with conn.cursor() as cur:
            cur.execute(INIT_SQL)
        conn.commit()
    logger.info("Database schema ready")


if __name__ == "__main__":
    from logging_setup import configure_logging

    configure_logging()
    init_database()
