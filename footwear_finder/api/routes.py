"""FastAPI route handlers.

Contract: client mistakes produce 400 with a specific `{"error": ...}` message; upstream and
database failures produce 500 with a generic message while details are logged internally only.
"""

from __future__ import annotations

import logging
from time import monotonic
from typing import Any

import psycopg
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from footwear_finder.app import App
from footwear_finder.db.pool import get_conn
from footwear_finder.db.query import fetch_exists, fetch_rows
from footwear_finder.intent.llm_client import EmptyInputError, UpstreamError
from footwear_finder.intent.parser import analyze_text
from footwear_finder.sql.builder import (
    build_search_query,
    build_top_selling_query,
    build_type_column_probe,
)
from footwear_finder.sql.catalog import resolve_table, top_selling_table

logger = logging.getLogger(__name__)

NO_TEXT_ERROR = "No text provided"
INVALID_TABLE_ERROR = "Invalid gender or footwear type provided"
INVALID_GENDER_ERROR = 'Invalid gender provided. Use "m" or "f".'
ANALYSIS_FAILED_ERROR = "Text analysis failed"
DB_FAILED_ERROR = "Database query failed"

router = APIRouter()


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str | None = None


class TopSellingRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    gender: str | None = None


def get_services(request: Request) -> App:
    """Return the application container attached to the running API."""

    return request.app.state.services


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _elapsed_ms(started: float) -> int:
    return int((monotonic() - started) * 1000)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/analyze", response_model=None)
async def analyze(
        payload: AnalyzeRequest | None = None,
        app: App = Depends(get_services),
) -> list[dict[str, Any]] | JSONResponse:
    """Analyze free text with Gemini and return the matching catalog rows."""

    started = monotonic()
    text = payload.text if payload is not None else None

    try:
        intent = await analyze_text(text, client=app.http_client, config=app.llm_config)
    except EmptyInputError:
        logger.info("analyze rejected reason=empty_text")
        return error_response(400, NO_TEXT_ERROR)
    except UpstreamError:
        logger.exception("analyze failed stage=gemini latency_ms=%d", _elapsed_ms(started))
        return error_response(500, ANALYSIS_FAILED_ERROR)

    table = resolve_table(intent.gender, intent.footwear_type)
    if table is None:
        logger.info(
            "analyze rejected reason=unresolved_table gender=%s footwear_type=%s",
            intent.gender,
            intent.footwear_type,
        )
        return error_response(400, INVALID_TABLE_ERROR)

    try:
        async with get_conn(app.pool) as conn:
            probe_sql, probe_params = build_type_column_probe(table)
            has_type_column = await fetch_exists(conn, probe_sql, probe_params)

            sql, params = build_search_query(table, intent, has_type_column=has_type_column)
            rows = await fetch_rows(conn, sql, params)
    except psycopg.Error:
        logger.exception("analyze failed stage=database table=%s", table)
        return error_response(500, DB_FAILED_ERROR)

    logger.info(
        "analyze ok table=%s type_filter=%s rows=%d latency_ms=%d",
        table,
        has_type_column and intent.subtype is not None,
        len(rows),
        _elapsed_ms(started),
    )
    return rows


@router.post("/top-selling", response_model=None)
async def top_selling(
        payload: TopSellingRequest | None = None,
        app: App = Depends(get_services),
) -> list[dict[str, Any]] | JSONResponse:
    """Return the five most-rated sport shoes for men or women."""

    started = monotonic()
    gender = payload.gender.strip().lower() if payload is not None and payload.gender else None

    table = top_selling_table(gender)
    if table is None:
        logger.info("top_selling rejected gender=%r", gender)
        return error_response(400, INVALID_GENDER_ERROR)

    sql, params = build_top_selling_query(table)
    try:
        async with get_conn(app.pool) as conn:
            rows = await fetch_rows(conn, sql, params)
    except psycopg.Error:
        logger.exception("top_selling failed table=%s", table)
        return error_response(500, DB_FAILED_ERROR)

    logger.info("top_selling ok table=%s rows=%d latency_ms=%d", table, len(rows), _elapsed_ms(started))
    return rows
