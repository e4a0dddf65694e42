"""Terminal palette shared by the console helpers and the log renderer."""

from __future__ import annotations

# Hex colors (Rich markup)
ACCENT = "#c792ea"
HIGHLIGHT = "#89ddff"
WARNING_AMBER = "#ffcb6b"
SUCCESS_GREEN = "#c3e88d"
ERROR_RED = "#ff5370"

# ANSI 24-bit escape codes (log renderer)
ANSI_ACCENT = "\033[38;2;199;146;234m"
ANSI_HIGHLIGHT = "\033[38;2;137;221;255m"
ANSI_WARNING_AMBER = "\033[38;2;255;203;107m"
ANSI_ERROR_RED = "\033[38;2;255;83;112m"
ANSI_MUTED = "\033[38;2;103;110;149m"
ANSI_RESET = "\033[0m"

LEVEL_COLORS: dict[str, str] = {
    "debug": ANSI_MUTED,
    "info": ANSI_HIGHLIGHT,
    "warning": ANSI_WARNING_AMBER,
    "warn": ANSI_WARNING_AMBER,
    "error": ANSI_ERROR_RED,
    "critical": ANSI_ACCENT,
}
