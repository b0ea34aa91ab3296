"""rolekeeper: a file-backed role and membership directory."""

__version__ = "0.3.0"

from rolekeeper.comparison import ComparisonPolicy  # noqa: E402
from rolekeeper.directory import RoleDirectory  # noqa: E402
from rolekeeper.errors import (  # noqa: E402
    InvalidArgumentError,
    PopulatedRoleError,
    RoleDirectoryError,
    RoleExistsError,
    RoleNotFoundError,
    StoreCorruptError,
    StoreError,
    StoreUnavailableError,
)
from rolekeeper.store import Role, RoleStore  # noqa: E402

__all__ = [
    "ComparisonPolicy",
    "InvalidArgumentError",
    "PopulatedRoleError",
    "Role",
    "RoleDirectory",
    "RoleDirectoryError",
    "RoleExistsError",
    "RoleNotFoundError",
    "RoleStore",
    "StoreCorruptError",
    "StoreError",
    "StoreUnavailableError",
    "__version__",
]
