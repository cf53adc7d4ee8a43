"""HTTP service entrypoint."""

from __future__ import annotations

import logging

import uvicorn

from footwear_finder.api.server import build_api
from footwear_finder.app import create_app
from footwear_finder.config.logging import configure_logging
from footwear_finder.config.settings import load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the HTTP API under uvicorn."""

    settings = load_settings()
    configure_logging()

    api = build_api(create_app(settings))

    logger.info("listening on %s:%d", settings.host, settings.port)
    # log_config=None keeps the root logging setup from `configure_logging`.
    uvicorn.run(api, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
