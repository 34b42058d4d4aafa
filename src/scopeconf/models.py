"""Data models for scopeconf."""

import os
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .utils import Sections
from .utils import normalize_section
from .utils import overlay_sections
from .utils import split_key


class Scope(Enum):
    """Configuration scope enumeration.

    SYSTEM, USER and LOCAL name physical configuration files. MERGED tags
    the synthetic view combining all three and is never backed by a file.
    """

    SYSTEM = "system"
    USER = "user"
    LOCAL = "local"
    MERGED = "merged"

    @property
    def is_physical(self) -> bool:
        """True for scopes backed by a file, False for MERGED."""
        return self is not Scope.MERGED

    @classmethod
    def physical(cls) -> tuple["Scope", "Scope", "Scope"]:
        """Physical scopes ordered from lowest to highest precedence."""
        return (cls.SYSTEM, cls.USER, cls.LOCAL)


@dataclass(frozen=True)
class ConfigPaths:
    """Paths to the three configuration scopes.

    Attributes:
        system: Machine-wide file (None disables the system scope)
        user: Per-user file
        local: Repository-local file (None outside a repository)
    """

    system: Path | None
    user: Path
    local: Path | None = None


_TRUTHY = ("1", "true", "yes", "on")


def default_paths(repo_dir: Path | None = None, tool: str = "git") -> ConfigPaths:
    """Build the conventional paths for a tool's three scopes.

    Defaults are ``/etc/{tool}config``, ``~/.{tool}config`` and
    ``{repo_dir}/.{tool}/config``. The environment can override them:

    - ``{TOOL}_CONFIG_SYSTEM``: path of the system file
    - ``{TOOL}_CONFIG_GLOBAL``: path of the user file
    - ``{TOOL}_CONFIG_NOSYSTEM``: when truthy, the system scope is disabled

    Args:
        repo_dir: Working tree root; None leaves the local scope unset
        tool: Tool name used to derive file names and variable names

    Returns:
        ConfigPaths for the tool
    """
    prefix = tool.upper().replace("-", "_")

    system: Path | None = Path(os.environ.get(f"{prefix}_CONFIG_SYSTEM") or f"/etc/{tool}config")
    if os.environ.get(f"{prefix}_CONFIG_NOSYSTEM", "").strip().lower() in _TRUTHY:
        system = None

    user = Path(os.environ.get(f"{prefix}_CONFIG_GLOBAL") or Path.home() / f".{tool}config")

    local = Path(repo_dir) / f".{tool}" / "config" if repo_dir is not None else None

    return ConfigPaths(system=system, user=user, local=local)


class ScopedConfig:
    """Sections of string key/values belonging to one physical scope.

    Keys are addressed by their fully-qualified dotted name, e.g.
    ``core.bare`` or ``remote.origin.url``.
    """

    def __init__(self, scope: Scope, sections: Sections | None = None):
        if not scope.is_physical:
            raise ValueError("ScopedConfig requires a physical scope")
        self._scope = scope
        self._sections: Sections = {}
        for section, keys in (sections or {}).items():
            self.add_section(section)
            for key, value in keys.items():
                if "." in str(key):
                    raise ValueError(f"Key '{key}' in section '{section}' must not contain '.'")
                self.set(f"{section}.{key}", value)

    @property
    def scope(self) -> Scope:
        """Scope this configuration belongs to; fixed at construction."""
        return self._scope

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get the value of a key.

        Args:
            name: Fully-qualified key, e.g. ``core.bare``
            default: Returned when the key is not set

        Returns:
            The stored value or default
        """
        section, key = split_key(name)
        return self._sections.get(section, {}).get(key, default)

    def has(self, name: str) -> bool:
        """Check whether this scope sets a key."""
        section, key = split_key(name)
        return key in self._sections.get(section, {})

    def set(self, name: str, value) -> None:
        """Set a key, creating its section if needed.

        Args:
            name: Fully-qualified key
            value: New value; non-strings are converted (booleans to true/false)
        """
        section, key = split_key(name)
        self._sections.setdefault(section, {})[key] = value if isinstance(value, str) else _to_str(value)

    def unset(self, name: str) -> bool:
        """Remove a key, dropping its section once empty.

        Returns:
            True if removed, False if not found
        """
        section, key = split_key(name)
        keys = self._sections.get(section)
        if keys is None or key not in keys:
            return False

        del keys[key]
        if not keys:
            del self._sections[section]
        return True

    def add_section(self, section: str) -> None:
        """Declare a section so it survives marshalling even without keys."""
        self._sections.setdefault(normalize_section(section), {})

    def sections(self) -> list[str]:
        """Section names in insertion order, subsections as ``name.sub``."""
        return list(self._sections)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield (fully-qualified key, value) pairs."""
        for section, keys in self._sections.items():
            for key, value in keys.items():
                yield f"{section}.{key}", value

    def to_dict(self) -> Sections:
        """Copy of the sections as nested dictionaries."""
        return {section: dict(keys) for section, keys in self._sections.items()}

    def __eq__(self, other):
        if not isinstance(other, ScopedConfig):
            return NotImplemented
        return self._scope is other._scope and self._sections == other._sections

    def __repr__(self):
        return f"ScopedConfig({self._scope.value}, {self._sections!r})"


class MergedConfig:
    """Combined view over the system, user and local configurations.

    The effective value of a key comes from the highest-precedence scope
    holding it: local, then user, then system. Mutations go to one of the
    constituent configurations and show up in the view immediately.
    """

    scope = Scope.MERGED

    def __init__(self, configs: Mapping[Scope, ScopedConfig]):
        """Wrap one configuration per physical scope.

        Args:
            configs: Configurations keyed by their own scope

        Raises:
            ValueError: If a physical scope is missing or a configuration is
                filed under a scope other than its own
        """
        self._configs: dict[Scope, ScopedConfig] = {}
        for scope in Scope.physical():
            if scope not in configs:
                raise ValueError(f"Missing {scope.value} scope configuration")
            config = configs[scope]
            if config.scope is not scope:
                raise ValueError(f"Configuration for {config.scope.value} scope given as {scope.value}")
            self._configs[scope] = config

    def scoped(self, scope: Scope) -> ScopedConfig:
        """Constituent configuration of one physical scope."""
        return self._configs[scope]

    def scoped_configs(self) -> list[ScopedConfig]:
        """Constituent configurations in system, user, local order."""
        return [self._configs[scope] for scope in Scope.physical()]

    def origin(self, name: str) -> Scope | None:
        """Scope supplying the effective value of a key, or None if unset."""
        for scope in reversed(Scope.physical()):
            if self._configs[scope].has(name):
                return scope
        return None

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get the effective value of a key.

        Returns:
            Value from the highest-priority scope setting it, or default
        """
        scope = self.origin(name)
        if scope is None:
            return default
        return self._configs[scope].get(name)

    def has(self, name: str) -> bool:
        """Check whether any scope sets a key."""
        return self.origin(name) is not None

    def set(self, name: str, value, scope: Scope = Scope.LOCAL) -> None:
        """Set a key in one constituent configuration.

        Args:
            name: Fully-qualified key
            value: New value
            scope: Target scope (default: LOCAL)
        """
        self._configs[scope].set(name, value)

    def unset(self, name: str, scope: Scope = Scope.LOCAL) -> bool:
        """Remove a key from one constituent configuration.

        Returns:
            True if removed, False if not found
        """
        return self._configs[scope].unset(name)

    def sections(self) -> list[str]:
        """Section names of the combined view."""
        return list(self.to_dict())

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield effective (fully-qualified key, value) pairs."""
        for section, keys in self.to_dict().items():
            for key, value in keys.items():
                yield f"{section}.{key}", value

    def to_dict(self) -> Sections:
        """Effective sections with local over user over system, key by key."""
        merged: Sections = {}
        for config in self.scoped_configs():
            merged = overlay_sections(merged, config.to_dict())
        return merged

    def __eq__(self, other):
        if not isinstance(other, MergedConfig):
            return NotImplemented
        return self.scoped_configs() == other.scoped_configs()

    def __repr__(self):
        return f"MergedConfig({self.to_dict()!r})"


def _to_str(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
