"""
Loguru configuration for the application.

This module configures loguru with:
- Automatic Trace ID in each log
- Configurable format from settings
- Redirection of standard library logs (uvicorn, pymongo) to loguru
"""

import logging
import sys
from typing import Any

from loguru import logger

from txgroups.config import settings
from txgroups.core.trace_context import current_trace_id


def add_trace_id(record: dict[str, Any]) -> bool:
    """
    Adds the trace_id to the log record.

    Args:
        record: Loguru record

    Returns:
        True to indicate that the filter passed
    """
    record["extra"]["trace_id"] = current_trace_id()
    return True


def configure_logger() -> None:
    """
    Configures loguru with application settings.

    Removes the default handler and adds a stderr handler using the
    level and format from settings.
    """
    logger.remove()

    logger.add(
        sink=sys.stderr,
        level=settings.log_level.upper(),
        format=settings.log_format,
        filter=add_trace_id,
        colorize=True,
        serialize=False,
        backtrace=True,
        diagnose=settings.debug,
        enqueue=settings.logger_enqueue,
    )


configure_logger()


__all__ = ["logger", "InterceptHandler", "intercept_standard_logging"]


class InterceptHandler(logging.Handler):
    """
    Handler to redirect standard logging logs to loguru.

    Captures logs from libraries that use standard logging (uvicorn,
    pymongo) and processes them with the loguru sink.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """
        Redirects a standard logging record to loguru.

        Args:
            record: logging.LogRecord record
        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


# pymongo logs every command at DEBUG; WARNING keeps connection problems only.
INTERCEPTED_LOGGERS: dict[str, int] = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.INFO,
    "uvicorn.error": logging.INFO,
    "fastapi": logging.INFO,
    "pymongo": logging.WARNING,
}


def intercept_standard_logging() -> None:
    """
    Configures redirection of standard logging to loguru.

    Call this function in main.py when initializing the app.
    """
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO)

    for logger_name, level in INTERCEPTED_LOGGERS.items():
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.setLevel(level)
        logging_logger.propagate = False
