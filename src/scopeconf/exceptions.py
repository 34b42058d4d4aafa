"""Exceptions for scopeconf."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error reading or writing a scope's backing file.

    Attributes:
        path: The file the error relates to, when known
    """

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class ScopeNotFoundError(ConfigFileError):
    """The file backing a scope does not exist.

    Readers treat this as empty content, it never reaches callers of
    ConfigManager.resolve().
    """

    pass


class StoreReadError(ConfigFileError):
    """Error reading an existing scope file."""

    pass


class StoreAccessError(ConfigFileError):
    """A scope's file cannot be opened for writing."""

    pass


class StorePermissionError(StoreAccessError):
    """Opening a scope's file for writing was denied."""

    pass


class StoreWriteError(ConfigFileError):
    """I/O failure while writing configuration bytes."""

    pass


class FormatParseError(ConfigError):
    """Configuration bytes could not be parsed or serialized.

    Attributes:
        line: 1-based line number of the offending input, when known
    """

    def __init__(self, message: str, line: int | None = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class ConfigValidationError(ConfigError):
    """Error validating configuration data."""

    pass
