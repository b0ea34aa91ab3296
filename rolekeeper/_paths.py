"""Shared secure-path helpers for role files."""

from __future__ import annotations

import sys
from pathlib import Path


def ensure_private_dir(path: Path) -> None:
    """Create a missing directory with mode 0o700.

    Existing directories are left alone: role files often live in a
    folder shared with the hosting application.
    """
    if path.exists():
        return
    path.mkdir(parents=True, exist_ok=True, mode=0o700)
    if sys.platform != "win32":
        path.chmod(0o700)


def secure_file(file_path: Path) -> None:
    """chmod an existing role file to 0o600 (owner-only)."""
    if sys.platform != "win32" and file_path.exists():
        file_path.chmod(0o600)
