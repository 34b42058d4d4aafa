"""Precedence merge of the three physical scopes."""

from collections.abc import Mapping

from .models import MergedConfig
from .models import Scope
from .models import ScopedConfig


def merge_configs(configs: Mapping[Scope, ScopedConfig]) -> MergedConfig:
    """Combine the system, user and local configurations.

    Merge order (later overrides earlier, key by key):
    1. System settings (lowest priority)
    2. User settings
    3. Local settings (highest priority)

    Args:
        configs: One ScopedConfig per physical scope

    Returns:
        MergedConfig over the given configurations

    Raises:
        ValueError: If a physical scope is missing or a configuration is
            filed under a scope other than its own
    """
    return MergedConfig(configs)
