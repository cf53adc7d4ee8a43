"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from footwear_finder.api.routes import error_response, router
from footwear_finder.app import App

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(api: FastAPI) -> AsyncIterator[None]:
    services: App = api.state.services
    await services.pool.open(wait=True)
    logger.info("database pool opened")
    try:
        yield
    finally:
        logger.info("shutting down")
        await services.http_client.aclose()
        await services.pool.close()


async def _invalid_body(_request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("invalid request body errors=%d", len(exc.errors()))
    return error_response(400, "Invalid request body")


def build_api(services: App) -> FastAPI:
    """Create the FastAPI app bound to `services`.

    The pool and HTTP client are opened/closed by the app lifespan, so they exist exactly once per
    process and are shared by all requests.
    """

    api = FastAPI(title="footwear-finder", lifespan=_lifespan)
    api.state.services = services
    api.add_exception_handler(RequestValidationError, _invalid_body)
    api.include_router(router)
    return api
