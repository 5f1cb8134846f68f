"""Stdlib logging configuration.

Routes and error handlers log through ``logging.getLogger(__name__)``;
domain services use logfire.
"""

import logging
import sys

from langrank.config import Settings

# Third-party loggers that are only interesting when debugging
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")


def _level_for(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the current environment.

    Args:
        settings: Application settings
    """
    level = _level_for(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if settings.debug else logging.WARNING)

    logging.getLogger("langrank").setLevel(level)

    logging.getLogger(__name__).info(
        f"Logging configured: environment={settings.environment}, "
        f"level={logging.getLevelName(level)}"
    )
