"""Logging configuration for the Ordering service.

stdlib logging carries the handlers (console plus rotating files) and
structlog renders the events: JSON in production and staging, a readable
console format everywhere else.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def _environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """Get log level based on environment."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(_environment(), "INFO"))


def setup_stdlib_logging(log_dir: Path, log_file_prefix: str) -> None:
    log_level = get_log_level()

    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_dir / f"{log_file_prefix}.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)

    error_handler = logging.handlers.RotatingFileHandler(
        filename=log_dir / f"{log_file_prefix}_error.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(error_handler)

    # Suppress noisy library loggers
    logging.getLogger("protean").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def setup_structlog() -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if _environment() in ("production", "staging"):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: Path | None = None, log_file_prefix: str | None = None) -> None:
    """Configure all logging for the application."""
    from ordering.config import settings

    setup_stdlib_logging(log_dir or settings.log_dir, log_file_prefix or settings.log_file_prefix)
    setup_structlog()


def bind_request_context(**kwargs: Any) -> None:
    """Attach key/values to every log line emitted while handling the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
