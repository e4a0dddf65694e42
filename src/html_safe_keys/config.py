"""Configuration management for html-safe-keys."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables (HTML_SAFE_KEYS_*) or .env."""

    model_config = SettingsConfigDict(
        env_prefix="HTML_SAFE_KEYS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Working tree
    project_root: Path = Field(
        default=Path("."),
        description="Working tree searched and rewritten (report paths are relative to it)",
    )
    views_root: str = Field(
        default="app/views/",
        description="Path prefix stripped when resolving lazy keys",
    )
    ignore_list_file: str = Field(
        default="config/initializers/copy_tuner.rb",
        description="File holding the ignored-keys configuration; its usages count as migrated",
    )

    # External commands
    detect_keys_command: str = Field(
        default="bin/rails copy_tuner:detect_html_incompatible_keys",
        description="Prints one <locale>.<key> per line for every HTML-incompatible key",
    )
    ignored_keys_command: str = Field(
        default='bin/rails runner "puts CopyTunerClient.configuration.ignored_keys.to_json"',
        description="Prints the ignored keys as a JSON array",
    )
    grep_command: str = Field(default="git grep", description="Text search command")

    # Search pipeline
    progress_interval: int = Field(
        default=100,
        ge=1,
        description="Print a progress line every N searched keys",
    )

    # Translation data
    key_column: str = Field(default="key", description="Translation CSV key column")
    timestamp_column: str = Field(
        default="created_at",
        description="First metadata column; value columns end before it",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON log lines")


# Default settings instance
settings = Settings()
