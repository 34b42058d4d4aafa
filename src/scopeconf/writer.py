"""Persistence of scoped and merged configurations."""

import logging
from typing import BinaryIO

from .codec import Codec
from .exceptions import StorePermissionError
from .exceptions import StoreWriteError
from .models import MergedConfig
from .models import Scope
from .models import ScopedConfig
from .store import ScopeStore

logger = logging.getLogger(__name__)


class ConfigWriter:
    """Writes configurations back to the scope files they belong to.

    Args:
        store: Store opening the scope files
        codec: Serializer and validator for configurations
    """

    def __init__(self, store: ScopeStore, codec: Codec):
        self.store = store
        self.codec = codec

    def set_config(self, config: ScopedConfig | MergedConfig) -> None:
        """Validate and persist a configuration.

        A ScopedConfig is written to its own scope. A MergedConfig is written
        to the system, user and local scopes in that order; the first failure
        stops the fan-out and scopes already written stay written.

        Raises:
            ConfigValidationError: If config is invalid; no file is opened
            StoreAccessError: If a user or local file cannot be opened, or
                the system file fails for a reason other than permission
            StoreWriteError: If writing the bytes fails
            FormatParseError: If config cannot be serialized
        """
        self.codec.validate(config)

        if config.scope is Scope.MERGED:
            for scoped in config.scoped_configs():
                self._write_scope(scoped)
        else:
            self._write_scope(config)

    def _write_scope(self, config: ScopedConfig) -> None:
        data = self.codec.marshal(config)

        stream = self._open_writer(config.scope)
        if stream is None:
            return

        try:
            with stream:
                stream.write(data)
        except OSError as e:
            raise StoreWriteError(f"Failed to write {config.scope.value} configuration: {e}") from e

        logger.info(f"Wrote {config.scope.value} scope configuration ({len(data)} bytes)")

    def _open_writer(self, scope: Scope) -> BinaryIO | None:
        if scope is Scope.SYSTEM:
            # Unprivileged users usually cannot write the system file
            try:
                return self.store.system_config_writer()
            except StorePermissionError:
                logger.debug("Skipping system scope write: permission denied")
                return None

        openers = {
            Scope.USER: self.store.user_config_writer,
            Scope.LOCAL: self.store.local_config_writer,
        }
        if scope not in openers:
            raise ValueError(f"Cannot write {scope.value} scope")
        return openers[scope]()
