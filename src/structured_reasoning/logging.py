"""Logging for the structured-reasoning server.

Everything goes to stderr, since stdout carries the MCP stdio transport, and
optionally to a file. Server, tools and middleware log through stdlib
loggers under ``structured_reasoning``; engines emit key/value events with
structlog, rendered by the same handlers.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structured_reasoning.config import Settings


PACKAGE_LOGGER = "structured_reasoning"

logger = logging.getLogger(PACKAGE_LOGGER)


def _handler(target: Path | None, level: int, formatter: logging.Formatter) -> logging.Handler:
    if target is None:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    settings: Settings | None = None,
    *,
    log_level: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Install handlers on the package logger and route structlog through it.

    Calling it again replaces the previous handlers, so the CLI can raise the
    level after settings are loaded.

    Args:
        settings: Settings to read level, format and log file from; defaults
            to the global settings
        log_level: Level name overriding ``settings.log_level``
        log_file: File overriding ``settings.log_file``

    Returns:
        The ``structured_reasoning`` logger
    """
    if settings is None:
        from structured_reasoning.config import get_settings

        settings = get_settings()

    level = logging.getLevelName((log_level or settings.log_level).upper())
    if not isinstance(level, int):
        level = logging.INFO
    formatter = logging.Formatter(settings.log_format)
    target = log_file or settings.log_file

    logger.setLevel(level)
    for old in logger.handlers:
        old.close()
    logger.handlers.clear()
    logger.addHandler(_handler(None, level, formatter))
    if target is not None:
        logger.addHandler(_handler(Path(target), level, formatter))
    logger.propagate = False

    configure_structlog()
    return logger


def configure_structlog() -> None:
    """Send structlog events through stdlib loggers of the same name."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


__all__ = ["PACKAGE_LOGGER", "configure_structlog", "logger", "setup_logging"]
