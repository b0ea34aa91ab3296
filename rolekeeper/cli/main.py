"""Typer CLI for rolekeeper: wiring hub for command modules."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from rolekeeper.cli._helpers import console, load_settings_or_exit

app = typer.Typer(
    name="rolekeeper",
    help="Manage roles and memberships in a role file.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        from rolekeeper import __version__

        console.print(f"rolekeeper {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
    role_file: Annotated[
        Path | None,
        typer.Option("--file", envvar="ROLEKEEPER_FILE", help="Role file (.xml, .yaml, .json)"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", envvar="ROLEKEEPER_CONFIG", help="Settings YAML file"),
    ] = None,
    case_sensitive: Annotated[
        bool | None,
        typer.Option(
            "--case-sensitive/--ignore-case",
            help="Compare role and user names case-sensitively",
            show_default=False,
        ),
    ] = None,
) -> None:
    """rolekeeper: file-backed roles and memberships."""
    from rolekeeper._log import setup_logging

    setup_logging(verbose=verbose)
    ctx.obj = load_settings_or_exit(config_file, role_file, case_sensitive)


from rolekeeper.cli.member_cmd import add, check, remove, roles_for  # noqa: E402
from rolekeeper.cli.role_cmd import create, delete, exists, find, list_roles, users  # noqa: E402

app.command("list")(list_roles)
app.command()(create)
app.command()(delete)
app.command()(exists)
app.command()(users)
app.command()(find)
app.command()(add)
app.command()(remove)
app.command("roles-for")(roles_for)
app.command()(check)
