"""html-safe-keys: find and migrate translation keys that break HTML auto-escaping."""

from html_safe_keys.classifier import UsageClassifier
from html_safe_keys.models import (
    CodeEdit,
    ReconciliationPlan,
    ReconciliationResult,
    Usage,
    UsageGroup,
    UsageKind,
    UsageRecord,
)
from html_safe_keys.reconcile import ReconciliationEngine
from html_safe_keys.report import ReportParser, SpreadsheetReportWriter
from html_safe_keys.rewrite import CodeRewriter
from html_safe_keys.translations import TranslationDataRewriter

__all__ = [
    "CodeEdit",
    "CodeRewriter",
    "ReconciliationEngine",
    "ReconciliationPlan",
    "ReconciliationResult",
    "ReportParser",
    "SpreadsheetReportWriter",
    "TranslationDataRewriter",
    "Usage",
    "UsageClassifier",
    "UsageGroup",
    "UsageKind",
    "UsageRecord",
]
