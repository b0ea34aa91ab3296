"""Exception hierarchy for role directory operations."""

from __future__ import annotations


class RoleDirectoryError(Exception):
    """Base error for role directory operations."""


class InvalidArgumentError(RoleDirectoryError, ValueError):
    """A required argument is missing or malformed."""


class RoleExistsError(RoleDirectoryError):
    """A role with the same name already exists."""


class RoleNotFoundError(RoleDirectoryError):
    """The operation needs a role that does not exist."""


class PopulatedRoleError(RoleDirectoryError):
    """Deletion refused because the role still has members."""


class StoreError(RoleDirectoryError):
    """Base error for persisted-storage failures."""


class StoreUnavailableError(StoreError):
    """The role file cannot be read or written."""


class StoreCorruptError(StoreError):
    """The role file exists but cannot be parsed."""


class SettingsError(Exception):
    """Raised when directory settings cannot be loaded or validated."""
