"""Settings that locate the role file and pick the comparison policy.

The data directory respects ``ROLEKEEPER_HOME``, then
``XDG_DATA_HOME/rolekeeper``, and falls back to ``~/.rolekeeper``.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ValidationInfo, field_validator

from rolekeeper._yaml import load_yaml_model
from rolekeeper.comparison import ComparisonPolicy
from rolekeeper.errors import SettingsError

DEFAULT_NAME = "XmlRoleProvider"
DEFAULT_DESCRIPTION = "XML Role Provider"
DEFAULT_FILE_NAME = "Roles.xml"


@lru_cache(maxsize=1)
def get_home_dir() -> Path:
    """Return the rolekeeper data directory.

    Resolution order:
    1. ``ROLEKEEPER_HOME`` environment variable
    2. ``XDG_DATA_HOME/rolekeeper`` (if ``XDG_DATA_HOME`` is set)
    3. ``~/.rolekeeper``
    """
    env = os.environ.get("ROLEKEEPER_HOME")
    if env:
        return Path(env)
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "rolekeeper"
    return Path.home() / ".rolekeeper"


class DirectorySettings(BaseModel):
    name: str = DEFAULT_NAME
    description: str = DEFAULT_DESCRIPTION
    file_name: str = DEFAULT_FILE_NAME
    folder: Path | None = None
    case_sensitive: bool = False

    @field_validator("name", "description", "file_name", mode="before")
    @classmethod
    def blank_is_default(cls, value: object, info: ValidationInfo) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value

    @property
    def policy(self) -> ComparisonPolicy:
        return ComparisonPolicy.from_case_sensitive(self.case_sensitive)

    def resolve_path(self) -> Path:
        folder = self.folder.expanduser() if self.folder is not None else get_home_dir()
        return folder / self.file_name


def load_settings(path: Path) -> DirectorySettings:
    """Read directory settings from a YAML file."""
    return load_yaml_model(path, DirectorySettings, SettingsError)


def open_directory(settings: DirectorySettings | None = None):
    """Build a :class:`~rolekeeper.directory.RoleDirectory` for *settings*."""
    from rolekeeper.directory import RoleDirectory

    settings = settings or DirectorySettings()
    return RoleDirectory(settings.resolve_path(), settings.policy)
