"""Cross-references report usages, translation data and the ignore list.

The engine is pure: it decides which translation rows to add and which
source lines to edit, and leaves writing to the translation and code
rewriters.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from html_safe_keys.keys import (
    HTML_SUFFIX,
    LEGACY_HTML_SUFFIX,
    contains_html_entity,
    dot_html_key,
    is_html_key,
    lazy_literal,
    underscore_html_key,
    unique,
)
from html_safe_keys.models import (
    CodeEdit,
    ReconciliationPlan,
    ReconciliationResult,
    TranslationTable,
    UsageKind,
    UsageRecord,
)

log = structlog.get_logger()


class ReconciliationEngine:
    """Plans a replace run from a parsed usages report."""

    def __init__(self, *, views_root: str = "app/views/") -> None:
        self.views_root = views_root

    def reconcile(
        self,
        records: list[UsageRecord],
        table: TranslationTable,
        ignored_keys: Iterable[str],
    ) -> ReconciliationPlan:
        # The report's static rows are the incompatible keys of this run
        incompatible_keys = {r.key for r in records if r.kind is UsageKind.STATIC and r.key}
        used_records = [r for r in records if r.is_used and r.key]
        keys_to_convert = {r.key for r in used_records}

        translation_keys = set(table.keys())
        result = ReconciliationResult(keys_with_special_chars=self._keys_with_special_chars(table))

        converted_rows: list[list[str]] = []
        code_replace_keys: list[str] = []
        for row in table.rows:
            key = table.key_of(row)
            if key in keys_to_convert:
                if key not in code_replace_keys:
                    code_replace_keys.append(key)
                has_counterpart = (
                    underscore_html_key(key) in translation_keys
                    or dot_html_key(key) in translation_keys
                )
                if not has_counterpart and key not in result.newly_replaced_keys:
                    converted = list(row)
                    converted[table.key_index] = underscore_html_key(key)
                    converted_rows.append(converted)
                    result.newly_replaced_keys.append(key)
            elif key in incompatible_keys and key not in result.not_used_incompatible_keys:
                result.not_used_incompatible_keys.append(key)

        edits = self._plan_edits(used_records, set(code_replace_keys), translation_keys)

        newly_replaced = set(result.newly_replaced_keys)
        result.existing_keys = [k for k in code_replace_keys if k not in newly_replaced]

        result.already_ignored_keys = unique(ignored_keys)
        already_ignored = set(result.already_ignored_keys)
        reported_keys = unique(r.key for r in records if r.kind is not UsageKind.DYNAMIC and r.key)
        result.keys_to_ignore = [k for k in reported_keys if k not in already_ignored]

        log.info(
            "Reconciliation planned",
            newly_replaced=len(result.newly_replaced_keys),
            existing=len(result.existing_keys),
            not_used=len(result.not_used_incompatible_keys),
            edits=len(edits),
        )
        return ReconciliationPlan(result=result, converted_rows=converted_rows, edits=edits)

    @staticmethod
    def _keys_with_special_chars(table: TranslationTable) -> list[str]:
        """Keys whose text holds HTML entities but lack an HTML-safe suffix."""
        keys = []
        for row in table.rows:
            key = table.key_of(row)
            if is_html_key(key):
                continue
            if any(contains_html_entity(value) for value in table.values_of(row)):
                keys.append(key)
        return unique(keys)

    @staticmethod
    def html_suffix_for(key: str, translation_keys: set[str]) -> str:
        """``_html`` unless only a legacy ``.html`` counterpart exists."""
        has_underscore = underscore_html_key(key) in translation_keys
        has_dot = dot_html_key(key) in translation_keys
        if has_underscore or not has_dot:
            return HTML_SUFFIX
        return LEGACY_HTML_SUFFIX

    def _plan_edits(
        self,
        used_records: list[UsageRecord],
        code_replace_keys: set[str],
        translation_keys: set[str],
    ) -> list[CodeEdit]:
        """Static edits first, then lazy ones, each in report order."""
        edits = []
        seen: set[tuple[str, int, str]] = set()
        suffixes: dict[str, str] = {}
        for kind in (UsageKind.STATIC, UsageKind.LAZY):
            for record in used_records:
                if record.kind is not kind or record.key not in code_replace_keys:
                    continue
                if record.line is None:
                    log.warning("Usage has no line number", key=record.key, file=record.file)
                    continue
                if record.key not in suffixes:
                    suffixes[record.key] = self.html_suffix_for(record.key, translation_keys)

                if kind is UsageKind.LAZY:
                    literal = lazy_literal(record.key, record.file, self.views_root)
                else:
                    literal = record.key
                # Two lazy calls of one key on a line share a single edit
                if (record.file, record.line, literal) in seen:
                    continue
                seen.add((record.file, record.line, literal))
                edits.append(
                    CodeEdit(
                        file=record.file,
                        line=record.line,
                        literal=literal,
                        replacement=literal + suffixes[record.key],
                        key=record.key,
                    )
                )
        return edits
