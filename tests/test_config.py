"""Tests for settings loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from html_safe_keys.config import Settings


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("HTML_SAFE_KEYS_PROGRESS_INTERVAL", raising=False)
    config = Settings(_env_file=None)
    assert config.project_root == Path(".")
    assert config.views_root == "app/views/"
    assert config.ignore_list_file == "config/initializers/copy_tuner.rb"
    assert config.grep_command == "git grep"
    assert config.progress_interval == 100
    assert config.log_level == "WARNING"


def test_environment_overrides(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("HTML_SAFE_KEYS_PROJECT_ROOT", str(tmp_path))
    monkeypatch.setenv("HTML_SAFE_KEYS_PROGRESS_INTERVAL", "25")
    monkeypatch.setenv("HTML_SAFE_KEYS_JSON_LOGS", "true")

    config = Settings(_env_file=None)

    assert config.project_root == tmp_path
    assert config.progress_interval == 25
    assert config.json_logs is True


def test_progress_interval_must_be_positive(monkeypatch) -> None:
    monkeypatch.setenv("HTML_SAFE_KEYS_PROGRESS_INTERVAL", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
