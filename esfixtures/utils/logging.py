"""
Structured logging for the esfixtures package.

Nothing is configured at import time: modules only call get_logger(), and
the embedding test suite opts in with setup_logging(). Output goes to a
handler on the "esfixtures" logger, so the host's root logger is untouched.
"""
import logging
import sys
from typing import Any, TextIO

import structlog

from ..config import Settings

PACKAGE_LOGGER = "esfixtures"


def setup_logging(settings: Settings | None = None, stream: TextIO | None = None) -> None:
    """
    Route esfixtures log events through structlog.

    Args:
        settings: Source of log_level/log_format; defaults to Settings()
        stream: Destination of rendered events, stderr by default
    """
    settings = settings or Settings()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.log_format == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # setup_logging may run again with other settings
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)
    package_logger.addHandler(handler)
    package_logger.setLevel(settings.log_level)
    package_logger.propagate = False


def get_logger(name: str) -> Any:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
