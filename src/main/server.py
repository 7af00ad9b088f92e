"""
Server Entry Point - Main Layer

This module serves as the entry point for running the API with uvicorn.
Similar to app.py, it loads settings and configures logging before the
server starts.
"""

import uvicorn

from src.main.config import get_settings
from src.shared import configure_logging, get_logger, update_logging_from_settings

logger = get_logger(__name__)


def main() -> None:
    """Start the uvicorn server with the configured host and port."""
    configure_logging()
    settings = get_settings()
    update_logging_from_settings(settings)

    logger.info(
        "server.starting",
        host=settings.ge.host,
        port=settings.ge.port,
        reload=settings.ge.reload,
        environment=settings.environment.value,
    )

    uvicorn.run(
        "src.main.app:app",
        host=settings.ge.host,
        port=settings.ge.port,
        reload=settings.ge.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
