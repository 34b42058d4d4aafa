"""Raw byte access to each physical scope."""

import logging

from .exceptions import ScopeNotFoundError
from .exceptions import StoreReadError
from .models import Scope
from .store import ScopeStore

logger = logging.getLogger(__name__)


class ScopeReader:
    """Reads the raw contents of one scope at a time.

    A scope without a file reads as empty content. Every other store error
    propagates to the caller.

    Args:
        store: Store locating the scope files
    """

    def __init__(self, store: ScopeStore):
        self.store = store

    def read(self, scope: Scope) -> bytes:
        readers = {
            Scope.SYSTEM: self.read_system,
            Scope.USER: self.read_user,
            Scope.LOCAL: self.read_local,
        }
        if scope not in readers:
            raise ValueError(f"Cannot read {scope.value} scope")
        return readers[scope]()

    def read_system(self) -> bytes:
        try:
            return self.store.system_config()
        except ScopeNotFoundError:
            logger.debug("No system configuration, treating as empty")
            return b""

    def read_user(self) -> bytes:
        try:
            return self.store.user_config()
        except ScopeNotFoundError:
            logger.debug("No user configuration, treating as empty")
            return b""

    def read_local(self) -> bytes:
        try:
            stream = self.store.config()
        except ScopeNotFoundError:
            logger.debug("No local configuration, treating as empty")
            return b""

        with stream:
            try:
                return stream.read()
            except OSError as e:
                raise StoreReadError(f"Failed to read local configuration: {e}") from e
