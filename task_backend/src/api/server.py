"""
HTTP server entry point.

Usage:
    python -m src.api.server
    task-backend
"""
from __future__ import annotations

import logging

import uvicorn

from .settings import get_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# PUBLIC_INTERFACE
def main() -> None:
    """Configure logging and serve the app on the configured host and port."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting HTTP server on %s:%s", settings.host, settings.port)

    uvicorn.run(
        "src.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
