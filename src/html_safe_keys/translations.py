"""Translation-data CSV export: reading it and writing converted rows."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from pathlib import Path

import structlog

from html_safe_keys.errors import TranslationDataError
from html_safe_keys.models import TranslationTable

log = structlog.get_logger()


def parse_translation_csv(
    text: str,
    *,
    key_column: str = "key",
    timestamp_column: str = "created_at",
) -> TranslationTable:
    """Parse export text (a leading BOM is dropped).

    The key column is looked up by name.

    Raises:
        TranslationDataError: If the text has no header row or no key column.
    """
    reader = csv.reader(io.StringIO(text.removeprefix("\ufeff"), newline=""))
    header = next(reader, None)
    if not header:
        raise TranslationDataError("Translation data has no header row")

    if key_column not in header:
        raise TranslationDataError(
            f"Translation data has no {key_column!r} column",
            details={"header": header},
        )
    key_index = header.index(key_column)
    value_end = header.index(timestamp_column) if timestamp_column in header else None
    rows = [row for row in reader if any(cell.strip() for cell in row)]
    return TranslationTable(header=header, rows=rows, key_index=key_index, value_end=value_end)


def read_translation_csv(
    path: str | Path,
    *,
    key_column: str = "key",
    timestamp_column: str = "created_at",
) -> TranslationTable:
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise TranslationDataError(
            f"Could not read translation data {path}: not UTF-8 ({e.reason} at byte {e.start})",
            details={"path": str(path)},
        ) from e
    table = parse_translation_csv(text, key_column=key_column, timestamp_column=timestamp_column)
    log.info("Translation data loaded", path=str(path), rows=len(table.rows))
    return table


class TranslationDataRewriter:
    """Writes a new export holding the header and the converted rows only."""

    def __init__(self, output_path: str | Path) -> None:
        self.output_path = Path(output_path)

    def write(self, header: list[str], rows: Iterable[list[str]]) -> int:
        count = 0
        with self.output_path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(header)
            for row in rows:
                writer.writerow(row)
                count += 1
        log.info("Converted translation data written", path=str(self.output_path), rows=count)
        return count
