"""Scope stores locate and open the file backing each scope."""

import logging
from pathlib import Path
from typing import BinaryIO
from typing import Protocol

from .exceptions import ScopeNotFoundError
from .exceptions import StoreAccessError
from .exceptions import StorePermissionError
from .exceptions import StoreReadError
from .models import ConfigPaths

logger = logging.getLogger(__name__)


class ScopeStore(Protocol):
    """Byte-level access to the system, user and local scope files.

    Readers raise ScopeNotFoundError when a scope has no file and
    StoreReadError for anything else. Writer openers raise
    StorePermissionError when access is denied and StoreAccessError for
    anything else. Callers own and close every stream they are given.
    """

    def system_config(self) -> bytes: ...

    def user_config(self) -> bytes: ...

    def config(self) -> BinaryIO:
        """Open the local scope file for reading."""
        ...

    def system_config_writer(self) -> BinaryIO: ...

    def user_config_writer(self) -> BinaryIO: ...

    def local_config_writer(self) -> BinaryIO: ...


class FileScopeStore:
    """ScopeStore backed by the files named in a ConfigPaths.

    Args:
        paths: Configuration file paths for all three scopes
    """

    def __init__(self, paths: ConfigPaths):
        self.paths = paths

    def system_config(self) -> bytes:
        with self._open_for_read(self.paths.system, "system") as f:
            return self._read_all(f, self.paths.system)

    def user_config(self) -> bytes:
        with self._open_for_read(self.paths.user, "user") as f:
            return self._read_all(f, self.paths.user)

    def config(self) -> BinaryIO:
        return self._open_for_read(self.paths.local, "local")

    def system_config_writer(self) -> BinaryIO:
        if self.paths.system is None:
            raise StorePermissionError("System scope is disabled")
        return self._open_for_write(self.paths.system)

    def user_config_writer(self) -> BinaryIO:
        return self._open_for_write(self.paths.user)

    def local_config_writer(self) -> BinaryIO:
        if self.paths.local is None:
            raise StoreAccessError("No local scope outside a repository")
        return self._open_for_write(self.paths.local)

    def _open_for_read(self, path: Path | None, name: str) -> BinaryIO:
        if path is None:
            raise ScopeNotFoundError(f"No {name} scope configured")

        try:
            return open(path, "rb")
        except FileNotFoundError as e:
            raise ScopeNotFoundError(f"No {name} configuration at {path}", path) from e
        except OSError as e:
            raise StoreReadError(f"Failed to read configuration from {path}: {e}", path) from e

    def _read_all(self, f: BinaryIO, path: Path | None) -> bytes:
        try:
            return f.read()
        except OSError as e:
            raise StoreReadError(f"Failed to read configuration from {path}: {e}", path) from e

    def _open_for_write(self, path: Path) -> BinaryIO:
        try:
            # Ensure directory exists
            path.parent.mkdir(parents=True, exist_ok=True)
            f = open(path, "wb")
        except PermissionError as e:
            raise StorePermissionError(f"Permission denied writing configuration to {path}", path) from e
        except OSError as e:
            raise StoreAccessError(f"Failed to open {path} for writing: {e}", path) from e

        logger.debug(f"Opened {path} for writing")
        return f
