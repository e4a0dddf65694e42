"""Data model shared by the search and replace pipelines."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum


class UsageKind(StrEnum):
    """How a translation key is written at its call site."""

    STATIC = "static"  # Full key literal: t('users.show.title')
    LAZY = "lazy"  # Dot-prefixed suffix resolved from the view path: t('.title')
    DYNAMIC = "dynamic"  # Interpolated key, never resolvable: t("users.#{kind}")


@dataclass(frozen=True)
class Usage:
    """One text-search hit.

    Attributes:
        file: Path relative to the project root
        line: 1-based line number
        code: Source line with surrounding whitespace stripped
        lazy_suffix: Dot-prefixed literal for lazy usages (e.g. ".description")
    """

    file: str
    line: int
    code: str
    lazy_suffix: str | None = None


@dataclass
class UsageGroup:
    """All usages found for one static key, or for every lazy/dynamic call site.

    Static groups carry their key; the single lazy group and the single
    dynamic group have an empty key.
    """

    kind: UsageKind
    key: str = ""
    usages: list[Usage] = field(default_factory=list)


@dataclass(frozen=True)
class UsageRecord:
    """One report row: Type, Key, Ignored, File, Line, Code.

    ``file``, ``line`` and ``code`` are None for the summary row of a
    static key without usages. ``ignored`` is None for dynamic rows.
    """

    kind: UsageKind
    key: str | None
    ignored: bool | None
    file: str | None = None
    line: int | None = None
    code: str | None = None

    @property
    def is_used(self) -> bool:
        """Resolvable usage with a location (the rows the replace pipeline rewrites)."""
        return self.kind is not UsageKind.DYNAMIC and bool((self.file or "").strip())


@dataclass
class TranslationTable:
    """A translation-data export: header plus raw rows.

    Value columns span from just after the key column up to, not including,
    the timestamp column (or to the end when there is none).
    """

    header: list[str]
    rows: list[list[str]]
    key_index: int = 0
    value_end: int | None = None

    def key_of(self, row: list[str]) -> str:
        return row[self.key_index] if len(row) > self.key_index else ""

    def values_of(self, row: list[str]) -> list[str]:
        return row[self.key_index + 1 : self.value_end]

    def keys(self) -> list[str]:
        return [self.key_of(row) for row in self.rows]


@dataclass(frozen=True)
class CodeEdit:
    """Replace the quoted ``literal`` on ``line`` of ``file`` with ``replacement``."""

    file: str
    line: int
    literal: str
    replacement: str
    key: str


@dataclass
class ReconciliationResult:
    """Outcome of a replace run. Every list keeps first-seen order without duplicates."""

    newly_replaced_keys: list[str] = field(default_factory=list)
    existing_keys: list[str] = field(default_factory=list)
    not_used_incompatible_keys: list[str] = field(default_factory=list)
    keys_to_ignore: list[str] = field(default_factory=list)
    already_ignored_keys: list[str] = field(default_factory=list)
    keys_with_special_chars: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return asdict(self)


@dataclass
class ReconciliationPlan:
    """Everything a replace run will do, computed before any file is touched."""

    result: ReconciliationResult
    converted_rows: list[list[str]] = field(default_factory=list)
    edits: list[CodeEdit] = field(default_factory=list)
