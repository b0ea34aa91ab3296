"""Role commands: list, create, delete, exists, users, find."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from rolekeeper.cli._helpers import console, directory_context


def list_roles(ctx: typer.Context) -> None:
    """List all roles with their member counts."""
    with directory_context(ctx) as directory:
        names = directory.get_all_roles()
        if not names:
            console.print("No roles defined.")
            return

        table = Table(title=escape(ctx.obj.description))
        table.add_column("Name", style="cyan")
        table.add_column("Members", justify="right")
        for name in names:
            table.add_row(escape(name), str(len(directory.get_users_in_role(name))))
        console.print(table)


def create(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Role name (no commas)")],
) -> None:
    """Create an empty role."""
    with directory_context(ctx) as directory:
        directory.create_role(name)
    console.print(f"[green]Created[/green] role {escape(name)}.")


def delete(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Role name")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Delete even if the role has members")
    ] = False,
) -> None:
    """Delete a role."""
    with directory_context(ctx) as directory:
        deleted = directory.delete_role(name, fail_if_populated=not force)
    if not deleted:
        console.print(f"[yellow]Warning:[/yellow] role {escape(name)} does not exist.")
        raise typer.Exit(1)
    console.print(f"[green]Deleted[/green] role {escape(name)}.")


def exists(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Role name")],
) -> None:
    """Exit 0 if the role exists, 1 otherwise."""
    with directory_context(ctx) as directory:
        found = directory.role_exists(name)
    console.print("yes" if found else "no")
    if not found:
        raise typer.Exit(1)


def users(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Role name")],
) -> None:
    """Print the members of a role."""
    with directory_context(ctx) as directory:
        members = directory.get_users_in_role(name)
    for member in members:
        console.print(escape(member))


def find(
    ctx: typer.Context,
    role: Annotated[str, typer.Argument(help="Role name")],
    match: Annotated[str, typer.Argument(help="Substring to look for in usernames")],
) -> None:
    """Print members of a role whose username contains MATCH."""
    with directory_context(ctx) as directory:
        members = directory.find_users_in_role(role, match)
    for member in members:
        console.print(escape(member))
