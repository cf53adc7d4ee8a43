"""Async Postgres connection pool.

One pool is created per process by the composition root, opened at startup and closed at shutdown.
Request handlers only borrow connections from it.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool


async def _configure(conn: AsyncConnection) -> None:
    # The catalog is read-only for this service; autocommit avoids idle-in-transaction sessions.
    await conn.set_autocommit(True)


def create_pool(
        conninfo: str,
        *,
        min_size: int = 1,
        max_size: int | None = None,
        timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Create an async DB pool.

    Note:
        The returned pool is created with `open=False`. Call `await pool.open()` at startup.
    """

    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        open=False,
        configure=_configure,
    )


@asynccontextmanager
async def get_conn(pool: AsyncConnectionPool) -> AsyncIterator[AsyncConnection]:
    """Borrow a connection from the pool for the duration of one request."""

    async with pool.connection() as conn:
        yield conn
