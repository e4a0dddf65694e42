"""Usage classification for the search pipeline.

Turns the candidate keys and raw search output into UsageGroups: one static
group per key (possibly empty), one lazy group and one dynamic group.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import structlog

from html_safe_keys.collaborators import TextSearch
from html_safe_keys.keys import extract_lazy_suffixes, parse_search_output
from html_safe_keys.models import Usage, UsageGroup, UsageKind

log = structlog.get_logger()

ProgressCallback = Callable[[int, int], None]


def static_group(key: str, search_output: str) -> UsageGroup:
    """Group for ``key``; empty when the search found nothing."""
    return UsageGroup(UsageKind.STATIC, key, parse_search_output(search_output))


def lazy_group(search_output: str) -> UsageGroup:
    """One usage per dot-prefixed literal, so a line may yield several."""
    usages = []
    for hit in parse_search_output(search_output):
        for suffix in extract_lazy_suffixes(hit.code):
            usages.append(Usage(hit.file, hit.line, hit.code, lazy_suffix=suffix))
    return UsageGroup(UsageKind.LAZY, "", usages)


def dynamic_group(search_output: str) -> UsageGroup:
    return UsageGroup(UsageKind.DYNAMIC, "", parse_search_output(search_output))


class UsageClassifier:
    """Runs the three searches and classifies every hit."""

    def __init__(
        self,
        searcher: TextSearch,
        *,
        progress_interval: int = 100,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.searcher = searcher
        self.progress_interval = progress_interval
        self.on_progress = on_progress

    def classify(self, keys: Iterable[str]) -> list[UsageGroup]:
        """Static groups in key order, then the lazy group, then the dynamic group."""
        groups = self.classify_static(keys)
        groups.append(lazy_group(self.searcher.find_lazy_calls()))
        groups.append(dynamic_group(self.searcher.find_dynamic_calls()))
        log.info(
            "Usages classified",
            static=sum(len(g.usages) for g in groups if g.kind is UsageKind.STATIC),
            lazy=len(groups[-2].usages),
            dynamic=len(groups[-1].usages),
        )
        return groups

    def classify_static(self, keys: Iterable[str]) -> list[UsageGroup]:
        keys = list(keys)
        total = len(keys)
        groups = []
        for count, key in enumerate(keys, start=1):
            if self.on_progress and count % self.progress_interval == 0:
                self.on_progress(count, total)
            groups.append(static_group(key, self.searcher.find_literal(key)))
        return groups
