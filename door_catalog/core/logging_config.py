# door_catalog/core/logging_config.py
"""
Centralized logging configuration for the application and the import commands.

Keeps catalog logs visible while quieting the database driver and HTTP
client libraries.
"""

import logging
import os


def configure_logging(level=None):
    """
    Configure logging for the application.

    - App code: INFO (or LOG_LEVEL)
    - Database and HTTP client loggers: WARNING only
    """

    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    # Quiet database loggers
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    # Quiet HTTP client loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger("door_catalog").setLevel(getattr(logging, log_level, logging.INFO))
    logging.getLogger("__main__").setLevel(getattr(logging, log_level, logging.INFO))

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured at level: {log_level}")
