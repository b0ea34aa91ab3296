"""String comparison policy shared by every role and user lookup."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from functools import lru_cache


@lru_cache(maxsize=4096)
def _upper_char(ch: str) -> str:
    upper = ch.upper()
    return upper if len(upper) == 1 else ch


class ComparisonPolicy(StrEnum):
    """How role names and usernames are matched.

    ``ORDINAL`` compares code points exactly. ``ORDINAL_IGNORE_CASE``
    upper-cases each character on its own before comparing, so ``"Admin"`` and
    ``"ADMIN"`` are the same role. Characters whose upper case is more than one
    character are left unchanged, so ``"straße"`` and ``"STRASSE"`` differ.
    """

    ORDINAL = "ordinal"
    ORDINAL_IGNORE_CASE = "ordinal-ignore-case"

    @classmethod
    def from_case_sensitive(cls, case_sensitive: bool) -> ComparisonPolicy:
        return cls.ORDINAL if case_sensitive else cls.ORDINAL_IGNORE_CASE

    def key(self, value: str) -> str:
        """Return the form of *value* that equal strings share under this policy."""
        if self is ComparisonPolicy.ORDINAL:
            return value
        return "".join(_upper_char(ch) for ch in value)

    def equals(self, a: str, b: str) -> bool:
        return self.key(a) == self.key(b)

    def contains(self, value: str, fragment: str) -> bool:
        """True if *fragment* occurs inside *value*."""
        return self.key(fragment) in self.key(value)

    def member_of(self, value: str, items: Iterable[str]) -> bool:
        """True if any of *items* equals *value*."""
        wanted = self.key(value)
        return any(self.key(item) == wanted for item in items)

