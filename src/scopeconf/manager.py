"""Configuration manager for the three-scope configuration system."""

import logging
from pathlib import Path
from typing import Any

from .codec import Codec
from .codec import GitConfigCodec
from .models import ConfigPaths
from .models import MergedConfig
from .models import Scope
from .models import ScopedConfig
from .reader import ScopeReader
from .resolver import ConfigResolver
from .store import FileScopeStore
from .store import ScopeStore
from .writer import ConfigWriter

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration across system/user/local scopes.

    Resolution order (highest to lowest priority):
    1. Local settings (repository)
    2. User settings (global)
    3. System settings (machine-wide)

    Args:
        paths: Configuration file paths for all three scopes
        codec: File format (default: git-config INI)
        store: Scope store to use instead of the files named by paths
    """

    def __init__(self, paths: ConfigPaths, codec: Codec | None = None, store: ScopeStore | None = None):
        self.paths = paths
        self.codec = codec or GitConfigCodec()
        self.store = store or FileScopeStore(paths)
        self.resolver = ConfigResolver(ScopeReader(self.store), self.codec)
        self.writer = ConfigWriter(self.store, self.codec)

    # ===== Resolve / Persist =====

    def resolve(self) -> MergedConfig:
        """Read all three scopes and merge them.

        Missing scope files behave as empty. Each call reads the files again.

        Returns:
            Merged configuration
        """
        return self.resolver.resolve()

    def persist(self, config: ScopedConfig | MergedConfig) -> None:
        """Write a configuration back to its scope, or all scopes if merged.

        Writing the system scope without permission is silently skipped.

        Args:
            config: Configuration to persist
        """
        self.writer.set_config(config)

    def scope_config(self, scope: Scope) -> ScopedConfig:
        """Read a single physical scope.

        Args:
            scope: SYSTEM, USER or LOCAL

        Returns:
            Configuration of that scope alone
        """
        return self.resolver.resolve_scope(scope)

    # ===== Key Access =====

    def get_value(self, name: str) -> str | None:
        """Get the effective value of a key, e.g. ``core.bare``.

        Returns:
            Value from the highest-priority scope defining it, or None
        """
        return self.resolve().get(name)

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings from all scopes as nested dictionaries.

        Returns:
            Mapping of section -> key -> value
        """
        return self.resolve().to_dict()

    def set_value(self, name: str, value: Any, scope: Scope = Scope.LOCAL) -> None:
        """Set a key in the specified scope.

        Only the target scope's file is rewritten.

        Args:
            name: Fully-qualified key, e.g. ``user.name``
            value: New value (stored as a string)
            scope: Target scope (default: LOCAL)
        """
        config = self.scope_config(scope)
        config.set(name, value)
        self.persist(config)
        logger.info(f"Set '{name}' in {scope.value} scope")

    def unset_value(self, name: str, scope: Scope = Scope.LOCAL) -> bool:
        """Remove a key from the specified scope.

        Args:
            name: Fully-qualified key
            scope: Target scope (default: LOCAL)

        Returns:
            True if removed, False if not found
        """
        config = self.scope_config(scope)
        if not config.unset(name):
            return False

        self.persist(config)
        logger.info(f"Removed '{name}' from {scope.value} scope")
        return True

    def scope_to_path(self, scope: Scope) -> Path | None:
        """Get path for a given scope.

        Args:
            scope: Physical scope

        Returns:
            Path for the given scope, None if the scope is disabled
        """
        scope_map = {
            Scope.SYSTEM: self.paths.system,
            Scope.USER: self.paths.user,
            Scope.LOCAL: self.paths.local,
        }
        return scope_map[scope]
