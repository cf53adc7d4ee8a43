"""Safe DB query helpers.

Queries must be parameterized; all values are passed via `params`. DB errors are not swallowed
(the HTTP layer decides how to report them).
"""

from __future__ import annotations

from typing import Any, LiteralString, cast

from psycopg import AsyncConnection
from psycopg.rows import dict_row


async def fetch_rows(
        conn: AsyncConnection,
        sql: str,
        params: tuple[Any, ...] = (),
) -> list[dict[str, Any]]:
    """Execute a query and return every row as a column-name -> value mapping."""

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(cast(LiteralString, sql), params)
        return await cur.fetchall()


async def fetch_exists(conn: AsyncConnection, sql: str, params: tuple[Any, ...] = ()) -> bool:
    """Execute a query and report whether it produced at least one row."""

    async with conn.cursor() as cur:
        await cur.execute(cast(LiteralString, sql), params)
        row = await cur.fetchone()

    return row is not None
