"""Structured logging for html-safe-keys."""

from html_safe_keys.logging.config import configure_logging
from html_safe_keys.logging.formatters import ConsoleRenderer

__all__ = [
    "ConsoleRenderer",
    "configure_logging",
]
