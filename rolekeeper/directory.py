"""Role directory: validated, lock-serialized role and membership operations."""

from __future__ import annotations

import re
import threading
from collections.abc import Sequence
from pathlib import Path

from rolekeeper._log import get_logger
from rolekeeper.comparison import ComparisonPolicy
from rolekeeper.errors import (
    InvalidArgumentError,
    PopulatedRoleError,
    RoleExistsError,
    RoleNotFoundError,
    StoreError,
)
from rolekeeper.store import Role, RoleStore

logger = get_logger("directory")

ROLE_NAME_SEPARATOR = ","

# Characters the XML 1.0 Char production excludes, plus CR, which parsers
# normalize to LF and so would not survive a save and reload.
_UNSTORABLE_CHARS = re.compile("[^\t\n\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _require(value: object, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"'{name}' must not be None")


def _require_storable(value: str, what: str) -> None:
    match = _UNSTORABLE_CHARS.search(value)
    if match is not None:
        raise InvalidArgumentError(
            f"{what} {value!r} contains a character that cannot be stored: {match.group()!r}"
        )


def _require_names(values: Sequence[str] | None, name: str) -> list[str]:
    """Validate a bulk argument and return it as a list.

    A bare string is rejected rather than split into characters.
    """
    _require(values, name)
    if isinstance(values, (str, bytes)):
        raise InvalidArgumentError(f"'{name}' must be a sequence of strings, not a single string")
    items = list(values)
    for i, item in enumerate(items):
        if item is None:
            raise InvalidArgumentError(f"'{name}[{i}]' must not be None")
        if not isinstance(item, str):
            raise InvalidArgumentError(
                f"'{name}[{i}]' must be a string, got {type(item).__name__}"
            )
    return items


class RoleDirectory:
    """Role and membership operations over a :class:`RoleStore`.

    Every operation runs under one lock, from the first read of the role list
    through the save that follows a mutation. Argument validation happens
    before the lock is taken, so a rejected call never changes state.

    Bulk operations (:meth:`add_users_to_roles`, :meth:`remove_users_from_roles`)
    skip roles that do not exist. Single-role lookups
    (:meth:`get_users_in_role`, :meth:`is_user_in_role`) raise
    :class:`RoleNotFoundError` instead.

    If a save fails the in-memory change is kept and the file is left behind.
    Callers that need the two back in step should close the directory and
    open a new one.
    """

    def __init__(
        self,
        store: RoleStore | Path | str,
        policy: ComparisonPolicy = ComparisonPolicy.ORDINAL_IGNORE_CASE,
    ) -> None:
        self._store = store if isinstance(store, RoleStore) else RoleStore(Path(store))
        self._policy = ComparisonPolicy(policy)
        self._lock = threading.Lock()

    @property
    def policy(self) -> ComparisonPolicy:
        return self._policy

    @property
    def store(self) -> RoleStore:
        return self._store

    # ------------------------------------------------------------------
    # Internal helpers (caller holds the lock)
    # ------------------------------------------------------------------

    def _find_role(self, name: str) -> Role | None:
        for role in self._store.roles:
            if self._policy.equals(role.name, name):
                return role
        return None

    def _save(self) -> None:
        try:
            self._store.save()
        except StoreError:
            logger.warning(
                "save to %s failed; in-memory roles are ahead of the file", self._store.path
            )
            raise

    # ------------------------------------------------------------------
    # Role management
    # ------------------------------------------------------------------

    def create_role(self, name: str) -> None:
        """Add an empty role named *name*."""
        _require(name, "name")
        if not name:
            raise InvalidArgumentError("Role name must not be empty")
        if ROLE_NAME_SEPARATOR in name:
            raise InvalidArgumentError(f"Role names cannot contain commas: {name!r}")
        _require_storable(name, "Role name")

        with self._lock:
            if self._find_role(name) is not None:
                raise RoleExistsError(f"Role '{name}' already exists")
            self._store.roles.append(Role(name=name))
            self._save()
        logger.debug("created role '%s'", name)

    def delete_role(self, name: str, fail_if_populated: bool = True) -> bool:
        """Remove the role named *name*.

        Returns False if there is no such role. Raises
        :class:`PopulatedRoleError` without changing anything when
        *fail_if_populated* is set and the role still has members.
        """
        _require(name, "name")
        with self._lock:
            role = self._find_role(name)
            if role is None:
                return False
            if fail_if_populated and role.users:
                raise PopulatedRoleError(
                    f"Cannot delete role '{role.name}': it has {len(role.users)} member(s)"
                )
            self._store.roles.remove(role)
            self._save()
        logger.debug("deleted role '%s'", role.name)
        return True

    def get_all_roles(self) -> list[str]:
        with self._lock:
            return [role.name for role in self._store.roles]

    def role_exists(self, name: str) -> bool:
        _require(name, "name")
        with self._lock:
            return self._find_role(name) is not None

    def get_role(self, name: str) -> Role | None:
        """Return a detached copy of the role named *name*, or None."""
        _require(name, "name")
        with self._lock:
            role = self._find_role(name)
            return role.model_copy(deep=True) if role is not None else None

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def add_users_to_roles(self, usernames: Sequence[str], role_names: Sequence[str]) -> None:
        """Add every username to every existing role in *role_names*."""
        usernames = _require_names(usernames, "usernames")
        role_names = _require_names(role_names, "role_names")
        for username in usernames:
            _require_storable(username, "Username")

        with self._lock:
            for role_name in role_names:
                role = self._find_role(role_name)
                if role is None:
                    logger.debug("add: skipping unknown role '%s'", role_name)
                    continue
                for username in usernames:
                    if not self._policy.member_of(username, role.users):
                        role.users.append(username)
            self._save()

    def remove_users_from_roles(
        self, usernames: Sequence[str], role_names: Sequence[str]
    ) -> None:
        """Remove every username from every existing role in *role_names*."""
        usernames = _require_names(usernames, "usernames")
        role_names = _require_names(role_names, "role_names")

        with self._lock:
            for role in self._store.roles:
                if not self._policy.member_of(role.name, role_names):
                    continue
                role.users[:] = [
                    user for user in role.users if not self._policy.member_of(user, usernames)
                ]
            self._save()

    def get_users_in_role(self, name: str) -> list[str]:
        _require(name, "name")
        with self._lock:
            role = self._find_role(name)
            if role is None:
                raise RoleNotFoundError(f"Role '{name}' does not exist")
            return list(role.users)

    def is_user_in_role(self, username: str, role_name: str) -> bool:
        _require(username, "username")
        _require(role_name, "role_name")
        with self._lock:
            role = self._find_role(role_name)
            if role is None:
                raise RoleNotFoundError(f"Role '{role_name}' does not exist")
            return self._policy.member_of(username, role.users)

    def get_roles_for_user(self, username: str) -> list[str]:
        _require(username, "username")
        with self._lock:
            return [
                role.name
                for role in self._store.roles
                if self._policy.member_of(username, role.users)
            ]

    def find_users_in_role(self, role_name: str, username_to_match: str) -> list[str]:
        """Members of *role_name* whose name contains *username_to_match*.

        An unknown role yields an empty list.
        """
        _require(role_name, "role_name")
        _require(username_to_match, "username_to_match")
        with self._lock:
            role = self._find_role(role_name)
            if role is None:
                return []
            return [u for u in role.users if self._policy.contains(u, username_to_match)]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        with self._lock:
            self._store.close()

    def __enter__(self) -> RoleDirectory:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
