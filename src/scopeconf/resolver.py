"""Resolution of the three scopes into one merged configuration."""

from .codec import Codec
from .merge import merge_configs
from .models import MergedConfig
from .models import Scope
from .models import ScopedConfig
from .reader import ScopeReader


class ConfigResolver:
    """Reads, parses and merges the system, user and local scopes.

    Resolution is a pure function of the scope files' current contents:
    nothing is cached between calls.

    Args:
        reader: Source of each scope's raw bytes
        codec: Parser for those bytes
    """

    def __init__(self, reader: ScopeReader, codec: Codec):
        self.reader = reader
        self.codec = codec

    def resolve(self) -> MergedConfig:
        """Build the merged view of all three scopes.

        Raises:
            StoreReadError: If a scope file exists but cannot be read
            FormatParseError: If any scope fails to parse; nothing is merged
        """
        configs = {scope: self.resolve_scope(scope) for scope in Scope.physical()}
        return merge_configs(configs)

    def resolve_scope(self, scope: Scope) -> ScopedConfig:
        """Parse a single physical scope."""
        # Newline framing keeps the first and last tokens of a file apart
        # from anything the codec sees around them.
        data = b"\n" + self.reader.read(scope) + b"\n"
        return self.codec.unmarshal(data, scope)
