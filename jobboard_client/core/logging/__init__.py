"""
Logging configuration module for structured logging.

This module configures the client's logging system using structlog.
It provides structured logging with JSON formatting for services that ship
their logs to a collector and human-readable console output otherwise.

The logging configuration includes:
- Timestamp formatting
- Log level inclusion
- JSON/Console output based on settings
- Logger caching
"""

import logging

import structlog

from jobboard_client.core.config.settings import settings


def configure_logging(log_level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Configures the client's logging system.

    Args:
        log_level: Standard library level name; defaults to LOG_LEVEL.
        json_logs: Render JSON lines instead of console output; defaults to LOG_JSON.
    """
    level = (log_level or settings.LOG_LEVEL).upper()
    use_json = settings.LOG_JSON if json_logs is None else json_logs

    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger()
