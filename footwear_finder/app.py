"""Application composition root.

This module wires together configuration, the DB pool and the outbound Gemini client shared by all
request handlers.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from psycopg_pool import AsyncConnectionPool

from footwear_finder.config.settings import Settings
from footwear_finder.db.pool import create_pool
from footwear_finder.intent.llm_client import LLMConfig, llm_config_from_settings


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    pool: AsyncConnectionPool
    http_client: httpx.AsyncClient
    llm_config: LLMConfig


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        Neither the DB pool nor the HTTP client is opened here; the API lifespan owns both.
    """

    pool = create_pool(settings.conninfo, max_size=settings.db_pool_max_size)
    http_client = httpx.AsyncClient(timeout=settings.llm_timeout_s)
    return App(
        settings=settings,
        pool=pool,
        http_client=http_client,
        llm_config=llm_config_from_settings(settings),
    )
