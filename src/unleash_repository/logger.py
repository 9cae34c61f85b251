"""structlog setup for applications embedding the repository."""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "unleash_repository"


def new_logger(
    level: str = "INFO",
    format: str = "json",
    **context: str,
) -> structlog.stdlib.BoundLogger:
    """Configure structlog and return the package logger bound to context.

    Args:
        level: log level name ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        format: "json" or "text"
        context: key/value pairs bound to every entry, e.g. app_name
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    logging.getLogger(LOGGER_NAME).setLevel(log_level)

    renderer: structlog.types.Processor
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.stdlib.get_logger(LOGGER_NAME).bind(**context)
