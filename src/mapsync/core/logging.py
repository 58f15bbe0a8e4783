"""Structured logging setup.

Uses structlog for structured JSON logging in production and
human-readable console output in development. Log lines go to stderr so
command output on stdout stays machine-readable.
"""

from __future__ import annotations

import logging
import sys

import structlog

from src.mapsync.config import Environment, get_settings


def configure_structlog(level: str | None = None) -> None:
    """Configure structlog processors based on environment.

    Args:
        level: Optional log level override. Defaults to settings.LOG_LEVEL.
    """
    settings = get_settings()
    log_level = (level or settings.LOG_LEVEL).upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level, logging.INFO),
        force=True,
    )

    shared_processors: list = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.ENVIRONMENT == Environment.production:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
