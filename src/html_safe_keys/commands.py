"""The search and replace pipelines.

``SearchCommand`` scans the working tree and writes the usages report.
``ReplaceCommand`` reads a reviewed report and the translation export,
rewrites source lines and writes the converted translation rows.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from rich.console import Console

from html_safe_keys.classifier import UsageClassifier
from html_safe_keys.cli.common import console as shared_console
from html_safe_keys.collaborators import ConfigSource, GitGrep, RailsRunner, TextSearch
from html_safe_keys.config import Settings, settings as default_settings
from html_safe_keys.keys import parse_candidate_keys, parse_ignored_keys
from html_safe_keys.models import ReconciliationResult, UsageRecord
from html_safe_keys.reconcile import ReconciliationEngine
from html_safe_keys.report import ReportParser, SpreadsheetReportWriter
from html_safe_keys.rewrite import CodeRewriter
from html_safe_keys.translations import TranslationDataRewriter, read_translation_csv

log = structlog.get_logger()


class SearchCommand:
    """Finds every usage of the HTML-incompatible keys."""

    def __init__(
        self,
        *,
        searcher: TextSearch | None = None,
        config_source: ConfigSource | None = None,
        config: Settings | None = None,
        console: Console | None = None,
    ) -> None:
        self.config = config or default_settings
        self.searcher = searcher or GitGrep(self.config)
        self.config_source = config_source or RailsRunner(self.config)
        self.console = console or shared_console

    def run(self, output_path: str | Path) -> list[UsageRecord]:
        self.console.print("Start")

        keys = parse_candidate_keys(self.config_source.detect_incompatible_keys())
        self.console.print(f"Searching {len(keys)} keys")

        classifier = UsageClassifier(
            self.searcher,
            progress_interval=self.config.progress_interval,
            on_progress=self._print_progress,
        )
        groups = classifier.classify(keys)

        ignored_keys = parse_ignored_keys(self.config_source.ignored_keys_text())
        writer = SpreadsheetReportWriter(keys, ignored_keys, self.config)
        rows = writer.write(groups, output_path)

        self.console.print("Finish")
        return rows

    def _print_progress(self, count: int, total: int) -> None:
        self.console.print(f"{count} / {total}")


class ReplaceCommand:
    """Migrates the keys of a reviewed usages report to their _html form."""

    def __init__(
        self,
        usages_path: str | Path,
        translations_path: str | Path,
        *,
        config_source: ConfigSource | None = None,
        config: Settings | None = None,
        rewriter: CodeRewriter | None = None,
    ) -> None:
        self.usages_path = Path(usages_path)
        self.translations_path = Path(translations_path)
        self.config = config or default_settings
        self.config_source = config_source or RailsRunner(self.config)
        self.rewriter = rewriter or CodeRewriter(self.config.project_root)

    def run(self, output_path: str | Path) -> ReconciliationResult:
        records = ReportParser(self.usages_path).parse()
        table = read_translation_csv(
            self.translations_path,
            key_column=self.config.key_column,
            timestamp_column=self.config.timestamp_column,
        )
        ignored_keys = parse_ignored_keys(self.config_source.ignored_keys_text())

        engine = ReconciliationEngine(views_root=self.config.views_root)
        plan = engine.reconcile(records, table, ignored_keys)

        TranslationDataRewriter(output_path).write(table.header, plan.converted_rows)
        changed = self.rewriter.apply(plan.edits)
        log.info("Replace finished", edits=len(plan.edits), changed=changed)
        return plan.result
