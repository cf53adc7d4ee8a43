"""Deterministic SQL builder.

Converts a resolved catalog table and a `QueryIntent` into parameterized SQL. Identifiers (tables,
columns) are strictly allowlisted; only values become bound parameters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from footwear_finder.intent.schema import QueryIntent
from footwear_finder.sql import columns
from footwear_finder.sql.catalog import KNOWN_TABLES

TOP_SELLING_LIMIT = 5


class SQLBuilderError(ValueError):
    """Raised when a query cannot be built from the given table/intent."""


@dataclass(frozen=True)
class BuiltQuery:
    """A parameterized SQL query ready for execution."""

    sql: str
    params: tuple[Any, ...]


def _quoted_table(table: str) -> str:
    if table not in KNOWN_TABLES:
        raise SQLBuilderError(f"Unknown catalog table: {table!r}")
    return f'"{table}"'


def _whole_word_pattern(word: str) -> str:
    # POSIX ARE used by Postgres `~*`; `re.escape` only emits backslashes before
    # non-alphanumerics, which ARE treats as literals.
    return rf"(^|\s){re.escape(word)}(\s|$)"


def _contains_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_type_column_probe(table: str) -> tuple[str, tuple[Any, ...]]:
    """Build a query returning one row iff `table` has a `Type` column."""

    _quoted_table(table)
    sql = (
        "SELECT 1 FROM information_schema.columns"
        " WHERE table_schema = current_schema() AND table_name = %s AND column_name = %s"
        " LIMIT 1"
    )
    return sql, (table, columns.TYPE_COLUMN_NAME)


def build_search_query(
        table: str,
        intent: QueryIntent,
        *,
        has_type_column: bool,
) -> tuple[str, tuple[Any, ...]]:
    """Build the filtered catalog SELECT for `/analyze`.

    Filters, combined with AND:
        - whole-word, case-insensitive color match on the description (if a color is given);
        - inclusive price range (always);
        - substring match on the subtype column (only if the table has one and a subtype is given).

    Rows are ordered by rating, best first.
    """

    clauses: list[str] = ["1=1"]
    params: list[Any] = []

    if intent.color:
        clauses.append(f"{columns.DESCRIPTION} ~* %s")
        params.append(_whole_word_pattern(intent.color))

    clauses.append(f"{columns.PRICE} >= %s AND {columns.PRICE} <= %s")
    params.extend([intent.price_min, intent.price_max])

    if has_type_column and intent.subtype:
        clauses.append(f"{columns.TYPE} ILIKE %s")
        params.append(_contains_pattern(intent.subtype))

    built = BuiltQuery(
        sql=(
            f"SELECT * FROM {_quoted_table(table)} WHERE {' AND '.join(clauses)}"
            f" ORDER BY {columns.RATING} DESC"
        ),
        params=tuple(params),
    )
    return built.sql, built.params


def build_top_selling_query(
        table: str,
        *,
        limit: int = TOP_SELLING_LIMIT,
) -> tuple[str, tuple[Any, ...]]:
    """Build the query for the most-rated products of a table."""

    if limit <= 0:
        raise SQLBuilderError("limit must be a positive integer")

    sql = f"SELECT * FROM {_quoted_table(table)} ORDER BY {columns.RATINGS_COUNT} DESC LIMIT %s"
    return sql, (limit,)
