"""File-backed role store: lazy load, write-through save."""

from __future__ import annotations

import contextlib
from pathlib import Path

from rolekeeper._log import get_logger
from rolekeeper._paths import ensure_private_dir, secure_file
from rolekeeper.errors import StoreUnavailableError
from rolekeeper.store.codecs import RoleCodec, codec_for_path
from rolekeeper.store.models import Role

logger = get_logger("store")


class RoleStore:
    """In-memory mirror of a role file.

    The file is read on first access to :attr:`roles` and the list is then
    mutated in place by the owner. :meth:`save` overwrites the file with the
    full list. The store does no locking; its owner serializes access.
    """

    def __init__(self, path: Path, codec: RoleCodec | None = None) -> None:
        self._path = Path(path)
        self._codec = codec or codec_for_path(self._path)
        self._roles: list[Role] | None = None
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def codec(self) -> RoleCodec:
        return self._codec

    @property
    def loaded(self) -> bool:
        return self._roles is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def roles(self) -> list[Role]:
        """The live role list, loaded from the file on first access."""
        if self._roles is None:
            return self.load()
        self._check_open()
        return self._roles

    def load(self) -> list[Role]:
        """(Re)read the file, replacing the in-memory list.

        A missing or blank file is an empty store.
        """
        self._check_open()
        if not self._path.exists():
            logger.debug("%s does not exist, starting empty", self._path)
            self._roles = []
            return self._roles
        try:
            text = self._path.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise StoreUnavailableError(f"Cannot read {self._path}: {e}") from e

        if not text.strip():
            self._roles = []
        else:
            # StoreCorruptError from the codec propagates unchanged
            self._roles = self._codec.decode(text)
        logger.debug("loaded %d role(s) from %s", len(self._roles), self._path)
        return self._roles

    def save(self) -> None:
        """Write the full role list to the file atomically."""
        roles = self.roles
        text = self._codec.encode(roles)
        tmp = self._path.with_name(f"{self._path.name}.tmp")
        try:
            ensure_private_dir(self._path.parent)
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(self._path)
            secure_file(self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StoreUnavailableError(f"Cannot write {self._path}: {e}") from e
        logger.debug("saved %d role(s) to %s", len(roles), self._path)

    def close(self) -> None:
        """Release the in-memory copy. Safe to call more than once."""
        if self._closed:
            return
        self._roles = None
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise StoreUnavailableError(f"Role store for {self._path} is closed")

    def __enter__(self) -> RoleStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RoleStore({str(self._path)!r})"
