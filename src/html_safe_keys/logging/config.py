"""Logging configuration.

Usage:
    from html_safe_keys.logging import configure_logging

    configure_logging(level="INFO")
    log = structlog.get_logger()
    log.info("Report written", rows=12)
"""

from __future__ import annotations

import logging
import sys

import structlog

from html_safe_keys.logging.formatters import ConsoleRenderer


def configure_logging(
    *,
    level: str = "WARNING",
    colors: bool | None = None,
    json_output: bool = False,
) -> None:
    """Configure structlog once at startup.

    Log lines go to stderr; stdout is reserved for command output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        colors: Enable colors (auto-detect TTY/FORCE_COLOR if None)
        json_output: Use JSON lines instead of the console renderer
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(format="%(message)s", level=numeric_level, stream=sys.stderr)

    if json_output:
        renderer: structlog.typing.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = ConsoleRenderer(colors=colors)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
