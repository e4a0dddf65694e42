"""In-place source edits for migrated keys."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

import structlog

from html_safe_keys.models import CodeEdit

log = structlog.get_logger()


def quoted_literal_pattern(literal: str) -> re.Pattern[str]:
    """Match ``literal`` only when directly enclosed in quotes."""
    return re.compile(rf"""(?<=['"]){re.escape(literal)}(?=['"])""")


class CodeRewriter:
    """Rewrites single lines of source files.

    Each edit reads the whole file, replaces the quoted literal on the
    target line and writes the file back. Line endings are kept as found.
    """

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def apply(self, edits: Iterable[CodeEdit]) -> int:
        """Apply edits one by one; returns how many lines changed."""
        changed = 0
        for edit in edits:
            if self.rewrite_line(edit.file, edit.line, edit.literal, edit.replacement):
                changed += 1
        return changed

    def rewrite_line(self, file: str, line: int, literal: str, replacement: str) -> bool:
        """Replace quoted ``literal`` with ``replacement`` on 1-based ``line``.

        Returns False when the line does not contain the quoted literal.
        """
        path = self.root / file
        lines = self._read_lines(path)
        if not 1 <= line <= len(lines):
            log.warning("Line out of range", file=file, line=line, lines=len(lines))
            return False

        original = lines[line - 1]
        updated = quoted_literal_pattern(literal).sub(lambda _: replacement, original)
        if updated == original:
            log.warning("Quoted key not found on line", file=file, line=line, literal=literal)
            return False

        lines[line - 1] = updated
        self._write_text(path, "\n".join(lines))
        log.info("Code rewritten", file=file, line=line, literal=literal, replacement=replacement)
        return True

    @staticmethod
    def _read_lines(path: Path) -> list[str]:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read().split("\n")

    @staticmethod
    def _write_text(path: Path, text: str) -> None:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
