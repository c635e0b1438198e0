"""
Database connection pool and connection manager.

All database access goes through record_conn().
Never use pool.acquire() directly outside this module.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from uuid import UUID

import asyncpg

from receiver.config import settings

pool: asyncpg.Pool | None = None


class PoolNotInitialized(RuntimeError):
    """Raised when a connection is requested before init_pool() succeeded."""


async def init_pool(dsn: str | None = None) -> None:
    """
    Initialize the connection pool.
    Called once at application startup.
    """
    global pool
    pool = await asyncpg.create_pool(
        dsn=dsn or settings.DATABASE_URL,
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        command_timeout=settings.DB_COMMAND_TIMEOUT,
        init=_init_connection,
    )


async def close_pool() -> None:
    """
    Close the connection pool.
    Called at application shutdown.
    """
    global pool
    if pool is not None:
        await pool.close()
        pool = None


def is_connected() -> bool:
    """True while the pool is open."""
    return pool is not None and not pool.is_closing()


async def _init_connection(conn: asyncpg.Connection) -> None:
    """
    Initialize each new connection.
    Decodes UUID columns to uuid.UUID.
    """
    await conn.set_type_codec(
        "uuid",
        encoder=str,
        decoder=lambda x: UUID(x),
        schema="pg_catalog",
    )


@asynccontextmanager
async def record_conn(lock_key: str | None = None):
    """
    Acquire a database connection inside a transaction.

    If lock_key is given, a transaction-scoped advisory lock derived from it
    is taken first. Writers sharing a key are serialized until commit;
    writers on different keys proceed independently.

    Usage:
        async with record_conn(lock_key=mobile) as conn:
            row = await conn.fetchrow("SELECT * FROM form_records WHERE mobile = $1", mobile)

    Yields:
        asyncpg.Connection with an open transaction
    """
    if pool is None:
        raise PoolNotInitialized("Database pool not initialized. Call init_pool() first.")

    async with pool.acquire() as conn:
        async with conn.transaction():
            if lock_key is not None:
                await conn.execute("SELECT pg_advisory_xact_lock(hashtext($1))", lock_key)
            yield conn
