"""structlog renderer for html-safe-keys.

Produces pipe-separated output: HH:MM:SS | level | message key=value...
"""

from __future__ import annotations

import os
import sys
import traceback
from datetime import datetime
from typing import TYPE_CHECKING, Any

from html_safe_keys.logging.colors import (
    ANSI_ERROR_RED,
    ANSI_HIGHLIGHT,
    ANSI_MUTED,
    ANSI_RESET,
    LEVEL_COLORS,
)

if TYPE_CHECKING:
    from structlog.typing import EventDict, WrappedLogger


class ConsoleRenderer:
    """Render log events as one readable line each.

    Example:
        14:02:11 | info  | Code rewritten file=app/views/home/index.html.erb line=2
    """

    def __init__(self, colors: bool | None = None, max_exception_frames: int = 5) -> None:
        self.max_exception_frames = max_exception_frames
        if colors is None:
            force_color = os.environ.get("FORCE_COLOR", "")
            self.colors = sys.stderr.isatty() or force_color not in ("", "0", "false")
        else:
            self.colors = colors

    def __call__(
        self,
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> str:
        timestamp = event_dict.pop("timestamp", datetime.now().strftime("%H:%M:%S"))
        level = event_dict.pop("level", method_name).lower()
        event = str(event_dict.pop("event", ""))

        exc_info = event_dict.pop("exc_info", None)
        exception_str = self._format_exception(exc_info) if exc_info else ""

        kv_pairs = self._format_kv_pairs(event_dict)

        if self.colors:
            ts = f"{ANSI_MUTED}{timestamp}{ANSI_RESET}"
            lvl = f"{LEVEL_COLORS.get(level, ANSI_HIGHLIGHT)}{level:<5}{ANSI_RESET}"
            kv = f"{ANSI_MUTED}{kv_pairs}{ANSI_RESET}" if kv_pairs else ""
        else:
            ts = timestamp
            lvl = f"{level:<5}"
            kv = kv_pairs

        line = f"{ts} | {lvl} | {event}"
        if kv:
            line += f" {kv}"
        if exception_str:
            line += f"\n{exception_str}"
        return line

    def _format_kv_pairs(self, event_dict: EventDict) -> str:
        return " ".join(f"{key}={value}" for key, value in event_dict.items() if not key.startswith("_"))

    def _format_exception(self, exc_info: tuple[Any, ...] | bool) -> str:
        """Format an exception with at most ``max_exception_frames`` frames."""
        if exc_info is True:
            exc_info = sys.exc_info()
        if not exc_info or exc_info[0] is None:
            return ""

        exc_type, exc_value, exc_tb = exc_info
        tb_lines = traceback.format_tb(exc_tb)
        if len(tb_lines) > self.max_exception_frames:
            tb_lines = ["  ... (truncated)\n", *tb_lines[-self.max_exception_frames :]]

        indent = "         "
        formatted_tb = "\n".join(indent + line for line in "".join(tb_lines).rstrip().split("\n"))

        if self.colors:
            return (
                f"{indent}{ANSI_ERROR_RED}{exc_type.__name__}: {exc_value}{ANSI_RESET}\n"
                f"{ANSI_MUTED}{formatted_tb}{ANSI_RESET}"
            )
        return f"{indent}{exc_type.__name__}: {exc_value}\n{formatted_tb}"
