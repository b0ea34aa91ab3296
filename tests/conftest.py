"""Shared test fixtures and helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from rolekeeper.comparison import ComparisonPolicy
from rolekeeper.directory import RoleDirectory
from rolekeeper.store import Role, RoleStore


def make_store(path: Path, roles: dict[str, list[str]] | None = None) -> RoleStore:
    """Build a RoleStore at *path*, optionally seeded and saved with *roles*."""
    store = RoleStore(path)
    if roles:
        store.roles.extend(Role(name=name, users=list(users)) for name, users in roles.items())
        store.save()
    return store


def make_directory(
    tmp_path: Path,
    *,
    roles: dict[str, list[str]] | None = None,
    policy: ComparisonPolicy = ComparisonPolicy.ORDINAL_IGNORE_CASE,
    file_name: str = "Roles.xml",
) -> RoleDirectory:
    """Build a RoleDirectory over a fresh file under *tmp_path*."""
    return RoleDirectory(make_store(tmp_path / file_name, roles), policy)


@pytest.fixture
def role_file(tmp_path):
    """Path to a not-yet-existing XML role file."""
    return tmp_path / "Roles.xml"


@pytest.fixture
def directory(tmp_path):
    """Case-insensitive directory over an empty XML file."""
    d = make_directory(tmp_path)
    yield d
    d.close()


@pytest.fixture
def strict_directory(tmp_path):
    """Case-sensitive directory over an empty XML file."""
    d = make_directory(tmp_path, policy=ComparisonPolicy.ORDINAL)
    yield d
    d.close()
