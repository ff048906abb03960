# db.py
import logging
from fastapi import Request
from psycopg_pool import AsyncConnectionPool
from psycopg.rows import dict_row

from config import DATABASE_URL, DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE
from errors import InternalError

logger = logging.getLogger(__name__)


async def open_pool(conninfo: str = DATABASE_URL) -> AsyncConnectionPool:
    """
    Create and open the connection pool.

    Called once from the application lifespan; the pool is kept on
    `app.state.pool` and handed to each request by `getDB`.
    """
    logger.info("Initializing connection pool min=%s max=%s", DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE)
    pool = AsyncConnectionPool(
        conninfo=conninfo,
        min_size=DB_POOL_MIN_SIZE,
        max_size=DB_POOL_MAX_SIZE,
        kwargs={"row_factory": dict_row},  # rows come back as dicts, e.g. record['id']
        open=False,
    )
    await pool.open()
    logger.info("Connection pool opened")
    return pool


async def close_pool(pool: AsyncConnectionPool | None) -> None:
    if pool is not None:
        await pool.close()
        logger.info("Connection pool closed")


async def getDB(request: Request):
    """
    FastAPI dependency that lends one pooled connection to a request.

    - The pool is injected through app.state, never a module global.
    - `async with pool.connection()` commits when the request succeeds and
      rolls back when an exception escapes, then returns the connection.
    """
    pool: AsyncConnectionPool | None = getattr(request.app.state, "pool", None)
    if pool is None:
        raise InternalError("Database connection pool is not available.")

    async with pool.connection() as conn:
        yield conn
