"""Tests for deterministic SQL builder (allowlists + parameter binding)."""

from __future__ import annotations

import pytest

from footwear_finder.intent.schema import QueryIntent
from footwear_finder.sql.builder import (
    SQLBuilderError,
    build_search_query,
    build_top_selling_query,
    build_type_column_probe,
)

_MEN_SPORT = "m_product_details_sport_shoes_processed"


def _placeholder_count(sql: str) -> int:
    return sql.count("%s")


def test_price_range_defaults_without_other_filters() -> None:
    sql, params = build_search_query(_MEN_SPORT, QueryIntent(), has_type_column=True)

    assert sql.startswith(f'SELECT * FROM "{_MEN_SPORT}" WHERE 1=1')
    assert '"Price" >= %s AND "Price" <= %s' in sql
    assert sql.endswith('ORDER BY "Rating" DESC')
    assert "~*" not in sql
    assert "ILIKE" not in sql
    assert params == (0, 50000)
    assert _placeholder_count(sql) == len(params)


def test_red_running_shoes_under_3000() -> None:
    intent = QueryIntent(
        gender="m",
        footwear_type="sport_shoes",
        color="red",
        price_max=3000,
    )
    sql, params = build_search_query(_MEN_SPORT, intent, has_type_column=False)

    assert '"Description" ~* %s' in sql
    assert "red" not in sql
    assert params == (r"(^|\s)red(\s|$)", 0, 3000)
    assert sql.index('"Description"') < sql.index('"Price"') < sql.index("ORDER BY")
    assert _placeholder_count(sql) == len(params)


def test_subtype_filter_requires_type_column() -> None:
    intent = QueryIntent(subtype="running")

    sql_with, params_with = build_search_query(_MEN_SPORT, intent, has_type_column=True)
    sql_without, params_without = build_search_query(_MEN_SPORT, intent, has_type_column=False)

    assert '"Type" ILIKE %s' in sql_with
    assert params_with == (0, 50000, "%running%")
    assert "Type" not in sql_without
    assert params_without == (0, 50000)


def test_type_column_without_subtype_adds_nothing() -> None:
    sql, params = build_search_query(_MEN_SPORT, QueryIntent(color="blue"), has_type_column=True)

    assert "ILIKE" not in sql
    assert params == (r"(^|\s)blue(\s|$)", 0, 50000)


def test_injection_values_only_appear_as_parameters() -> None:
    payload = "'; DROP TABLE x;--"
    intent = QueryIntent(color=payload, subtype=payload, price_min=10, price_max=20)
    sql, params = build_search_query(_MEN_SPORT, intent, has_type_column=True)

    baseline_sql, _ = build_search_query(
        _MEN_SPORT,
        QueryIntent(color="red", subtype="running"),
        has_type_column=True,
    )

    assert sql == baseline_sql
    assert "DROP" not in sql
    assert any("drop table x" in str(p) for p in params)
    assert _placeholder_count(sql) == len(params)


def test_like_wildcards_in_subtype_are_escaped() -> None:
    _sql, params = build_search_query(
        _MEN_SPORT,
        QueryIntent(subtype="100%_mesh"),
        has_type_column=True,
    )
    assert params[-1] == r"%100\%\_mesh%"


def test_regex_metacharacters_in_color_are_escaped() -> None:
    _sql, params = build_search_query(_MEN_SPORT, QueryIntent(color="red.*"), has_type_column=False)
    assert params[0] == r"(^|\s)red\.\*(\s|$)"


def test_unknown_table_is_rejected() -> None:
    with pytest.raises(SQLBuilderError):
        build_search_query("users; --", QueryIntent(), has_type_column=False)
    with pytest.raises(SQLBuilderError):
        build_type_column_probe("pg_catalog.pg_user")
    with pytest.raises(SQLBuilderError):
        build_top_selling_query("m_product_details_boots_processed")


def test_type_column_probe_binds_table_and_column() -> None:
    sql, params = build_type_column_probe(_MEN_SPORT)

    assert "information_schema.columns" in sql
    assert _MEN_SPORT not in sql
    assert params == (_MEN_SPORT, "Type")
    assert _placeholder_count(sql) == len(params)


def test_top_selling_query_shape() -> None:
    sql, params = build_top_selling_query("w_product_details_sport_shoes_processed")

    assert sql == (
        'SELECT * FROM "w_product_details_sport_shoes_processed"'
        ' ORDER BY "Ratings Count" DESC LIMIT %s'
    )
    assert params == (5,)


def test_top_selling_limit_must_be_positive() -> None:
    with pytest.raises(SQLBuilderError):
        build_top_selling_query(_MEN_SPORT, limit=0)
