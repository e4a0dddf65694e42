"""Usages spreadsheet: building and writing rows, and reading them back.

Columns are Type, Key, Ignored, File, Line, Code. The search pipeline writes
the sheet; after review, the replace pipeline parses it again.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from zipfile import BadZipFile

import structlog
from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils.exceptions import InvalidFileException

from html_safe_keys.config import Settings, settings as default_settings
from html_safe_keys.errors import ReportFormatError, ReportReadError
from html_safe_keys.keys import HTML_SUFFIX, derive_lazy_key
from html_safe_keys.models import Usage, UsageGroup, UsageKind, UsageRecord

log = structlog.get_logger()

HEADER = ["Type", "Key", "Ignored", "File", "Line", "Code"]
REQUIRED_COLUMNS = ["Type", "Key", "File", "Line"]
SHEET_NAME = "Data"
MONOSPACE = Font(name="Courier New", size=14)


def _flag(value: bool | None) -> str | None:
    if value is None:
        return None
    return "Y" if value else "N"


class SpreadsheetReportWriter:
    """Filters classified usages into report rows and serializes them."""

    def __init__(
        self,
        incompatible_keys: Iterable[str],
        ignored_keys: Iterable[str],
        config: Settings | None = None,
    ) -> None:
        self.incompatible_keys = frozenset(incompatible_keys)
        self.ignored_keys = frozenset(ignored_keys)
        self.config = config or default_settings

    def is_already_migrated(self, usage: Usage, key: str) -> bool:
        """Usage lives in the ignore-list file or already names the _html key."""
        if usage.file == self.config.ignore_list_file:
            return True
        return f"{usage.lazy_suffix or key}{HTML_SUFFIX}" in usage.code

    def build_rows(self, groups: Iterable[UsageGroup]) -> list[UsageRecord]:
        rows: list[UsageRecord] = []
        for group in groups:
            rows.extend(self._group_rows(group))
        return rows

    def _group_rows(self, group: UsageGroup) -> list[UsageRecord]:
        rows = []
        for usage in group.usages:
            if group.kind is UsageKind.LAZY:
                key = derive_lazy_key(usage.file, usage.lazy_suffix or "", self.config.views_root)
                if key not in self.incompatible_keys:
                    continue
            else:
                key = group.key
            if self.is_already_migrated(usage, group.key):
                continue

            if group.kind is UsageKind.DYNAMIC:
                rows.append(UsageRecord(group.kind, None, None, usage.file, usage.line, usage.code))
            else:
                rows.append(
                    UsageRecord(
                        group.kind,
                        key,
                        key in self.ignored_keys,
                        usage.file,
                        usage.line,
                        usage.code,
                    )
                )

        if not rows and group.kind is UsageKind.STATIC:
            rows.append(UsageRecord(group.kind, group.key, group.key in self.ignored_keys))
        return rows

    def write(self, groups: Iterable[UsageGroup], output_path: str | Path) -> list[UsageRecord]:
        """Build the rows and save them as an .xlsx workbook."""
        rows = self.build_rows(groups)
        write_report(rows, output_path)
        return rows


def write_report(rows: Iterable[UsageRecord], output_path: str | Path) -> None:
    """Save rows with a filtered, frozen header row."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_NAME

    _append(sheet, HEADER)
    count = 0
    for row in rows:
        _append(
            sheet,
            [str(row.kind), row.key, _flag(row.ignored), row.file, row.line, row.code],
        )
        count += 1

    sheet.auto_filter.ref = "A1:F1"
    sheet.freeze_panes = "A2"
    workbook.save(output_path)
    log.info("Report written", path=str(output_path), rows=count)


def _cell_value(value: object) -> object:
    if not isinstance(value, str):
        return value
    # Control characters are not allowed in worksheet XML
    return ILLEGAL_CHARACTERS_RE.sub("", value) or None


def _append(sheet, values: list) -> None:
    sheet.append([_cell_value(value) for value in values])
    for cell in sheet[sheet.max_row]:
        cell.font = MONOSPACE
        # HAML/Slim lines start with "=", which would be stored as a formula
        if isinstance(cell.value, str):
            cell.data_type = "s"


class ReportParser:
    """Reads a usages report back into UsageRecords.

    Columns are located by header name. Rows with an unknown Type, a
    static or lazy row without a Key, and rows with a non-numeric Line
    are skipped.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def parse(self) -> list[UsageRecord]:
        return list(self.parse_rows(self._read_rows()))

    def _read_rows(self) -> list[tuple]:
        """All sheet rows as value tuples.

        Raises:
            ReportReadError: If the file is not an xlsx workbook.
        """
        try:
            workbook = load_workbook(self.path, read_only=True, data_only=True)
        except (InvalidFileException, BadZipFile, KeyError) as e:
            raise ReportReadError(str(self.path), str(e) or type(e).__name__) from e
        try:
            return list(workbook.worksheets[0].iter_rows(values_only=True))
        finally:
            workbook.close()

    def parse_rows(self, rows: Iterable[tuple]) -> Iterable[UsageRecord]:
        rows = iter(rows)
        header = [_text(value) for value in next(rows, ())]
        missing = [name for name in REQUIRED_COLUMNS if name not in header]
        if missing:
            raise ReportFormatError(str(self.path), missing)
        index = {name: header.index(name) for name in HEADER if name in header}

        for number, row in enumerate(rows, start=2):
            record = self._record(row, index)
            if record is None:
                log.warning("Skipping report row", path=str(self.path), row=number)
                continue
            yield record

    @staticmethod
    def _record(row: tuple, index: dict[str, int]) -> UsageRecord | None:
        def cell(name: str) -> object:
            i = index.get(name)
            return row[i] if i is not None and i < len(row) else None

        try:
            kind = UsageKind(_text(cell("Type")))
        except ValueError:
            return None
        key = _text(cell("Key")) or None
        if kind is not UsageKind.DYNAMIC and key is None:
            return None

        line_value = cell("Line")
        try:
            line = None if _text(line_value) == "" else int(float(line_value))
        except (TypeError, ValueError):
            return None

        ignored = {"Y": True, "N": False}.get(_text(cell("Ignored")))
        return UsageRecord(
            kind=kind,
            key=key,
            ignored=ignored,
            file=_text(cell("File")) or None,
            line=line,
            code=_text(cell("Code")) or None,
        )


def _text(value: object) -> str:
    return "" if value is None else str(value).strip()
