"""Structured logging configuration using structlog.

JSON output for deployed instances, coloured console output for local work.

Usage::

    from finarrow.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("upload_parsed", filename="metrics.xlsx", records=12)
    # {"event": "upload_parsed", "filename": "metrics.xlsx", "records": 12, "level": "info", ...}
"""

import logging
import sys
from typing import Any

import structlog

_configured = False


def setup_logging(json_logs: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        json_logs: Render events as JSON lines instead of console text.
        log_level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    global _configured

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    _configured = True


def is_configured() -> bool:
    return _configured


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to *name* (usually ``__name__``)."""
    return structlog.get_logger(name)
