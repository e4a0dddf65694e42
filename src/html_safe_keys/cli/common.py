"""Shared CLI utilities - console, message helpers, tables."""

from __future__ import annotations

import json

from rich import box
from rich.console import Console
from rich.table import Table

from html_safe_keys.logging.colors import (
    ACCENT,
    ERROR_RED,
    HIGHLIGHT,
    SUCCESS_GREEN,
    WARNING_AMBER,
)

# Shared console instance (for styled output only, NOT for JSON)
console = Console()


def print_json(data: object) -> None:
    """Print JSON to stdout without Rich formatting.

    Rich wraps long lines at terminal width, which would break JSON parsing.
    """
    print(json.dumps(data, indent=2, ensure_ascii=False))


def success(message: str) -> None:
    console.print(f"[{SUCCESS_GREEN}]✓[/{SUCCESS_GREEN}] {message}")


def error(message: str) -> None:
    console.print(f"[{ERROR_RED}]✗[/{ERROR_RED}] {message}")


def warn(message: str) -> None:
    console.print(f"[{WARNING_AMBER}]![/{WARNING_AMBER}] {message}")


def info(message: str) -> None:
    console.print(f"[{HIGHLIGHT}]→[/{HIGHLIGHT}] {message}")


def create_table(title: str | None = None, *columns: str) -> Table:
    """Create a table with a header underline and no heavy frame."""
    table = Table(title=title, box=box.SIMPLE_HEAD, header_style=f"bold {HIGHLIGHT}")
    for i, col in enumerate(columns):
        table.add_column(col, style=ACCENT if i == 0 else None)
    return table
