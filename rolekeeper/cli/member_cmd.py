"""Membership commands: add, remove, roles-for, check."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape

from rolekeeper.cli._helpers import console, directory_context

_UsersOpt = Annotated[list[str], typer.Option("--user", "-u", help="Username (repeatable)")]
_RolesOpt = Annotated[list[str], typer.Option("--role", "-r", help="Role name (repeatable)")]


def add(ctx: typer.Context, user: _UsersOpt, role: _RolesOpt) -> None:
    """Add users to roles. Unknown roles are skipped."""
    with directory_context(ctx) as directory:
        directory.add_users_to_roles(user, role)
    console.print(f"[green]Added[/green] {len(user)} user(s) to {len(role)} role(s).")


def remove(ctx: typer.Context, user: _UsersOpt, role: _RolesOpt) -> None:
    """Remove users from roles. Unknown roles and users are ignored."""
    with directory_context(ctx) as directory:
        directory.remove_users_from_roles(user, role)
    console.print(f"[green]Removed[/green] {len(user)} user(s) from {len(role)} role(s).")


def roles_for(
    ctx: typer.Context,
    username: Annotated[str, typer.Argument(help="Username")],
) -> None:
    """Print the roles a user belongs to."""
    with directory_context(ctx) as directory:
        names = directory.get_roles_for_user(username)
    for name in names:
        console.print(escape(name))


def check(
    ctx: typer.Context,
    username: Annotated[str, typer.Argument(help="Username")],
    role: Annotated[str, typer.Argument(help="Role name")],
) -> None:
    """Exit 0 if the user is in the role, 1 otherwise."""
    with directory_context(ctx) as directory:
        member = directory.is_user_in_role(username, role)
    console.print("yes" if member else "no")
    if not member:
        raise typer.Exit(1)
