"""Pytest fixtures and fakes for html-safe-keys tests.

This module provides:
- FakeSearch: canned `git grep` output per query
- FakeConfigSource: canned incompatible-key and ignored-key dumps
- settings / console fixtures isolated to tmp_path
- make_file: writes a source file under tmp_path

Usage:
    def test_something(fake_search, fake_config_source, test_settings):
        fake_search.literal["sample.hello"] = "app/views/a.html.erb:1:  t('sample.hello')"
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field

import pytest
from rich.console import Console

from html_safe_keys.config import Settings
from html_safe_keys.logging import configure_logging

configure_logging(level="WARNING", colors=False)


@dataclass
class FakeSearch:
    """In-memory TextSearch recording every literal query."""

    literal: dict[str, str] = field(default_factory=dict)
    default_literal: str = ""
    lazy: str = ""
    dynamic: str = ""
    queries: list[str] = field(default_factory=list)

    def find_literal(self, text: str) -> str:
        self.queries.append(text)
        return self.literal.get(text, self.default_literal)

    def find_lazy_calls(self) -> str:
        return self.lazy

    def find_dynamic_calls(self) -> str:
        return self.dynamic


@dataclass
class FakeConfigSource:
    """In-memory ConfigSource."""

    incompatible: str = ""
    ignored: str = ""

    def detect_incompatible_keys(self) -> str:
        return self.incompatible

    def ignored_keys_text(self) -> str:
        return self.ignored


@pytest.fixture
def fake_search() -> FakeSearch:
    return FakeSearch()


@pytest.fixture
def fake_config_source() -> FakeConfigSource:
    return FakeConfigSource()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings rooted at tmp_path, ignoring any .env in the working directory."""
    return Settings(_env_file=None, project_root=tmp_path)


@pytest.fixture
def console_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def quiet_console(console_buffer) -> Console:
    """Plain console writing to console_buffer."""
    return Console(file=console_buffer, width=200, color_system=None, highlight=False)


@pytest.fixture
def make_file(tmp_path):
    """Create ``tmp_path/relative`` with ``content`` (parents included)."""

    def _make(relative: str, content: str):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _make
