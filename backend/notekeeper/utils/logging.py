from __future__ import annotations

import logging
import sys

from notekeeper.config import settings


def setup_logging() -> None:
    """Configure root logging from settings."""

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING if not settings.debug else logging.INFO)
    logging.getLogger("notekeeper").setLevel(
        logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    )

    logging.info("Logging configured", extra={"level": settings.log_level})


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
