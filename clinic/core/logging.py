from __future__ import annotations

import logging
import sys

from loguru import logger

from clinic.core.config import LoggingConfig

_LOGGING_CONFIGURED = False

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

# Chatty stdlib loggers kept at WARNING regardless of the configured level.
_QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "uvicorn.access")


def setup_logging(config: LoggingConfig) -> None:
    """Route clinic logs to stdout through loguru, once per process."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level = config.level.upper()
    logging.basicConfig(level=level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.remove()
    logger.add(
        sys.stdout,
        level=level,
        format=LOG_FORMAT,
        serialize=config.json_logs,
        enqueue=True,
        diagnose=False,
        backtrace=False,
    )

    _LOGGING_CONFIGURED = True
    logger.debug("Logging configured at {level} (json={json_logs})", level=level, json_logs=config.json_logs)
