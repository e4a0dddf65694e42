"""External processes: text search and the Rails configuration dump.

Both collaborators block until the process exits. ``git grep`` exiting with
status 1 means "no match"; any other failure raises CollaboratorError.
"""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from typing import Protocol

import structlog

from html_safe_keys.config import Settings, settings as default_settings
from html_safe_keys.errors import CollaboratorError
from html_safe_keys.keys import DYNAMIC_CALL_PATTERN, LAZY_CALL_PATTERN

log = structlog.get_logger()


class TextSearch(Protocol):
    """Source of ``path:line_number:code`` search output."""

    def find_literal(self, text: str) -> str: ...

    def find_lazy_calls(self) -> str: ...

    def find_dynamic_calls(self) -> str: ...


class ConfigSource(Protocol):
    """Source of the incompatible-key list and the ignored-key dump."""

    def detect_incompatible_keys(self) -> str: ...

    def ignored_keys_text(self) -> str: ...


def _run(
    cmd: list[str],
    cwd: Path,
    operation: str,
    *,
    ok_codes: tuple[int, ...] = (0,),
) -> str:
    """Run ``cmd`` and return its stdout."""
    log.debug("Running command", operation=operation, cmd=shlex.join(cmd))
    try:
        result = subprocess.run(cmd, check=False, cwd=cwd, capture_output=True, text=True)  # noqa: S603
    except OSError as e:
        raise CollaboratorError(operation, None, str(e)) from e
    if result.returncode not in ok_codes:
        raise CollaboratorError(operation, result.returncode, result.stderr)
    return result.stdout


class GitGrep:
    """Text search over the tracked files of the working tree."""

    def __init__(self, config: Settings | None = None) -> None:
        self.config = config or default_settings
        self.base_cmd = shlex.split(self.config.grep_command)

    def _grep(self, args: list[str], operation: str) -> str:
        # Exit status 1 is "nothing matched"
        return _run(
            [*self.base_cmd, "-n", *args],
            self.config.project_root,
            operation,
            ok_codes=(0, 1),
        )

    def find_literal(self, text: str) -> str:
        return self._grep(["-F", "-e", text], f"search for {text!r}")

    def find_lazy_calls(self) -> str:
        return self._grep(["-P", "-e", LAZY_CALL_PATTERN], "lazy key search")

    def find_dynamic_calls(self) -> str:
        return self._grep(["-P", "-e", DYNAMIC_CALL_PATTERN], "dynamic key search")


class RailsRunner:
    """Dumps translation configuration from the application."""

    def __init__(self, config: Settings | None = None) -> None:
        self.config = config or default_settings

    def detect_incompatible_keys(self) -> str:
        return _run(
            shlex.split(self.config.detect_keys_command),
            self.config.project_root,
            "incompatible key detection",
        )

    def ignored_keys_text(self) -> str:
        return _run(
            shlex.split(self.config.ignored_keys_command),
            self.config.project_root,
            "ignored keys dump",
        )
