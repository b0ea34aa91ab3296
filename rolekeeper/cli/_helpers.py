"""Shared CLI helpers: console, settings resolution, and directory context."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from rolekeeper.config import DirectorySettings
    from rolekeeper.directory import RoleDirectory

console = Console()


def load_settings_or_exit(
    config_file: Path | None,
    role_file: Path | None,
    case_sensitive: bool | None,
) -> DirectorySettings:
    """Build settings from an optional YAML file plus command-line overrides."""
    from rolekeeper.config import DirectorySettings, load_settings
    from rolekeeper.errors import SettingsError

    if config_file is not None:
        try:
            settings = load_settings(config_file)
        except SettingsError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1) from None
    else:
        settings = DirectorySettings()

    updates: dict[str, object] = {}
    if role_file is not None:
        updates["folder"] = role_file.parent
        updates["file_name"] = role_file.name
    if case_sensitive is not None:
        updates["case_sensitive"] = case_sensitive
    return settings.model_copy(update=updates) if updates else settings


@contextmanager
def directory_context(ctx: typer.Context) -> Iterator[RoleDirectory]:
    """Open the directory for the current invocation and report its errors.

    Any :class:`~rolekeeper.errors.RoleDirectoryError` is printed and turned
    into exit code 1.
    """
    from rolekeeper.config import open_directory
    from rolekeeper.errors import RoleDirectoryError

    settings: DirectorySettings = ctx.obj
    try:
        with open_directory(settings) as directory:
            yield directory
    except RoleDirectoryError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None
