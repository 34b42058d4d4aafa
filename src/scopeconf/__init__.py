"""scopeconf: Three-scope configuration resolution for command-line tools.

This library resolves a tool's configuration from three scopes:
- System (typically /etc/gitconfig)
- User global (typically ~/.gitconfig)
- Local/repository (typically .git/config)

Applications inject paths to define their configuration policy. The library
reads every scope, merges them with local > user > system precedence, and
writes changes back to the scope they belong to.

Public API:
    ConfigManager: Main class for configuration operations
    ConfigPaths: Dataclass defining paths to all three config scopes
    default_paths: Conventional paths with environment overrides
    Scope: Enum for SYSTEM/USER/LOCAL/MERGED scopes
    ScopedConfig, MergedConfig: Configuration structures
    GitConfigCodec, YamlCodec: File formats
    ConfigError and subclasses: Exception types

Example:
    ```python
    from pathlib import Path
    from scopeconf import ConfigManager, Scope, default_paths

    config = ConfigManager(default_paths(repo_dir=Path(".")))

    # Read merged settings
    merged = config.resolve()
    bare = merged.get("core.bare")

    # Write to specific scope
    config.set_value("user.name", "Alice", scope=Scope.USER)
    ```
"""

from .codec import Codec
from .codec import GitConfigCodec
from .codec import YamlCodec
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .exceptions import FormatParseError
from .exceptions import StoreAccessError
from .exceptions import StorePermissionError
from .exceptions import StoreReadError
from .exceptions import StoreWriteError
from .manager import ConfigManager
from .merge import merge_configs
from .models import ConfigPaths
from .models import MergedConfig
from .models import Scope
from .models import ScopedConfig
from .models import default_paths
from .store import FileScopeStore
from .store import ScopeStore

__version__ = "0.1.0"

__all__ = [
    "ConfigManager",
    "ConfigPaths",
    "default_paths",
    "Scope",
    "ScopedConfig",
    "MergedConfig",
    "merge_configs",
    "Codec",
    "GitConfigCodec",
    "YamlCodec",
    "ScopeStore",
    "FileScopeStore",
    "ConfigError",
    "ConfigFileError",
    "ConfigValidationError",
    "FormatParseError",
    "StoreAccessError",
    "StorePermissionError",
    "StoreReadError",
    "StoreWriteError",
]
