"""
Runtime configuration from the environment.

    WARLORDS_ENV                   development | production
    WARLORDS_LOG_LEVEL             logging level name (default INFO, DEBUG in development)
    WARLORDS_ALLOW_INVALID_MOVES   "1"/"true" starts controllers in debug bypass mode
"""

import logging
import os


WARLORDS_ENV = os.getenv("WARLORDS_ENV", "development")
WARLORDS_LOG_LEVEL = os.getenv(
    "WARLORDS_LOG_LEVEL", "DEBUG" if WARLORDS_ENV == "development" else "INFO"
)
WARLORDS_ALLOW_INVALID_MOVES = os.getenv("WARLORDS_ALLOW_INVALID_MOVES", "").lower() in (
    "1",
    "true",
    "yes",
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None):
    """Configure root logging for CLI and scripts."""
    logging.basicConfig(
        level=level if level is not None else WARLORDS_LOG_LEVEL.upper(),
        format=LOG_FORMAT,
    )
