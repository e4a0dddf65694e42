"""Main CLI application.

`html-safe-keys search` writes the usages report.
`html-safe-keys replace` migrates the keys of a reviewed report.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as pkg_version
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from html_safe_keys.cli.common import (
    console,
    create_table,
    error,
    info,
    print_json,
    success,
    warn,
)
from html_safe_keys.commands import ReplaceCommand, SearchCommand
from html_safe_keys.config import Settings, settings
from html_safe_keys.errors import KeyMigrationError
from html_safe_keys.logging import configure_logging
from html_safe_keys.models import ReconciliationResult

app = typer.Typer(
    name="html-safe-keys",
    help="Find and migrate translation keys that break HTML auto-escaping",
    add_completion=False,
    no_args_is_help=True,
)

RootOption = Annotated[
    Path | None,
    typer.Option("--root", "-C", help="Project root (defaults to HTML_SAFE_KEYS_PROJECT_ROOT or .)"),
]

RESULT_SECTIONS = [
    ("newly_replaced_keys", "Newly replaced keys (added to translation data)"),
    ("existing_keys", "Keys whose HTML-safe counterpart already existed"),
    ("not_used_incompatible_keys", "Incompatible keys without usages"),
    ("keys_to_ignore", "Keys to add to ignored_keys"),
    ("already_ignored_keys", "Already ignored keys"),
    ("keys_with_special_chars", "Keys with HTML entities but no _html suffix"),
]


@app.callback()
def _configure() -> None:
    configure_logging(level=settings.log_level, json_output=settings.json_logs)


def _settings_for(root: Path | None) -> Settings:
    if root is None:
        return settings
    return settings.model_copy(update={"project_root": root})


def _fail(e: Exception) -> NoReturn:
    error(str(e))
    raise typer.Exit(1) from e


@app.command()
def search(
    output_path: Annotated[Path, typer.Argument(help="Spreadsheet (.xlsx) to write")],
    root: RootOption = None,
) -> None:
    """Search the working tree for HTML-incompatible keys and write a usages report."""
    try:
        SearchCommand(config=_settings_for(root)).run(output_path)
    except (KeyMigrationError, OSError) as e:
        _fail(e)
    success(f"Usages written to {output_path}")


@app.command()
def replace(
    usages_path: Annotated[Path, typer.Argument(help="Reviewed usages report (.xlsx)")],
    translations_path: Annotated[Path, typer.Argument(help="Translation data export (.csv)")],
    output_path: Annotated[Path, typer.Argument(help="CSV to write converted rows to")],
    root: RootOption = None,
    json_out: Annotated[bool, typer.Option("--json", help="Print the result as JSON")] = False,
) -> None:
    """Rewrite code to _html keys and emit the translation rows to import."""
    try:
        result = ReplaceCommand(usages_path, translations_path, config=_settings_for(root)).run(
            output_path
        )
    except (KeyMigrationError, OSError) as e:
        _fail(e)

    if json_out:
        print_json(result.to_dict())
        return
    print_result(result)
    success(f"Converted translation data written to {output_path}")


def print_result(result: ReconciliationResult) -> None:
    """One table per non-empty result list."""
    data = result.to_dict()
    if not any(data.values()):
        info("Nothing to migrate")
        return
    for field_name, title in RESULT_SECTIONS:
        keys = data[field_name]
        if not keys:
            continue
        table = create_table(f"{title} ({len(keys)})", "Key")
        for key in keys:
            table.add_row(key)
        console.print(table)
    if result.keys_with_special_chars:
        warn("Review keys with HTML entities: their text will be escaped when rendered")


@app.command()
def version() -> None:
    """Show the installed version."""
    try:
        console.print(pkg_version("html-safe-keys"))
    except PackageNotFoundError:
        console.print("0.0.0")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
