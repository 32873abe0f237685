"""
TripNest Backend — Command Line Entry Point
=============================================

What:  `python -m tripnest` (or the `tripnest` console script) starts the API.
How:   Configures logging, refuses to start without store credentials
       (exit status 1), then serves `tripnest.main:app` with uvicorn on
       HOST:PORT from the environment.
"""

import logging
import sys

import uvicorn

from tripnest.config import settings
from tripnest.exceptions import ConfigurationError
from tripnest.main import setup_logging

logger = logging.getLogger("tripnest")


def main() -> None:
    setup_logging()

    try:
        settings.validate_required()
    except ConfigurationError as e:
        logger.error(e.message)
        sys.exit(1)

    logger.info("Server running on port %d", settings.port)
    uvicorn.run(
        "tripnest.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
