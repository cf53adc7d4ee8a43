"""Process-wide logging setup."""

from __future__ import annotations

import logging
import os


def configure_logging(level: str | None = None) -> None:
    """Install a single stream handler on the root logger.

    `level` wins over `LOG_LEVEL`; INFO otherwise. Request handlers log failures with tracebacks
    here and answer clients with a generic message only.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    # One line per Gemini call otherwise.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
