"""Structured logging setup.

structlog renders to the console in development and to JSON lines
elsewhere. Modules get their logger with ``get_logger(__name__)``.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from scopeguard.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        settings: Optional settings instance. Loaded from environment if omitted.
    """
    if settings is None:
        settings = get_settings()
    level = getattr(logging, settings.log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "console" and settings.is_development:
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=not settings.is_development,
    )

    # Third-party libraries (psycopg, uvicorn) log through the stdlib
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", "psycopg.pool"):
        logging.getLogger(logger_name).setLevel(level)


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Get a structured logger, optionally bound to initial key/values."""
    return structlog.get_logger(name or "scopeguard", **initial_values)
