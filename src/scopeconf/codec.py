"""Codecs converting between configuration bytes and ScopedConfig.

GitConfigCodec reads and writes the git-config INI dialect::

    [core]
        bare = false
    [remote "origin"]
        url = https://example.com/repo.git  # trailing comment

YamlCodec stores the same section/key/value structure as a YAML mapping.
"""

import re
from typing import Protocol

import yaml

from .exceptions import ConfigValidationError
from .exceptions import FormatParseError
from .models import MergedConfig
from .models import Scope
from .models import ScopedConfig

_SECTION_NAME = re.compile(r"[A-Za-z0-9-]+\Z")
_HEADER_NAME = re.compile(r"[A-Za-z0-9.-]+")
_KEY_NAME = re.compile(r"[A-Za-z][A-Za-z0-9-]*\Z")

# Whitespace git trims around lines; other separators are ordinary characters
_BLANK = " \t\v\f\r"

_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t", "b": "\b"}


class Codec(Protocol):
    """Converts configuration bytes to and from a ScopedConfig."""

    def unmarshal(self, data: bytes, scope: Scope) -> ScopedConfig:
        """Parse data into a configuration tagged with scope or raise FormatParseError."""
        ...

    def marshal(self, config: ScopedConfig) -> bytes:
        """Serialize config or raise FormatParseError."""
        ...

    def validate(self, config: ScopedConfig | MergedConfig) -> None:
        """Raise ConfigValidationError if config cannot be stored."""
        ...


def validate_config(config: ScopedConfig | MergedConfig) -> None:
    """Check section names, key names and values of a configuration.

    A MergedConfig is valid when each of its scoped configurations is.

    Raises:
        ConfigValidationError: On the first invalid name or value
    """
    if isinstance(config, MergedConfig):
        for scoped in config.scoped_configs():
            validate_config(scoped)
        return

    for section in config.sections():
        name, _, subsection = section.partition(".")
        if not _SECTION_NAME.match(name):
            raise ConfigValidationError(f"Invalid section name '{name}' in {config.scope.value} scope")
        if "\n" in subsection or "\0" in subsection:
            raise ConfigValidationError(f"Invalid subsection {subsection!r} in {config.scope.value} scope")

    for name, value in config.items():
        key = name.rpartition(".")[2]
        if not _KEY_NAME.match(key):
            raise ConfigValidationError(f"Invalid key name '{name}' in {config.scope.value} scope")
        if "\0" in value:
            raise ConfigValidationError(f"Value of '{name}' contains a NUL byte")


class GitConfigCodec:
    """git-config INI dialect.

    Section and key names are case-insensitive, subsections are not. A key
    without ``=`` is a boolean ``true``. When a key is assigned more than once
    in the same input, the last assignment wins.
    """

    def unmarshal(self, data: bytes, scope: Scope) -> ScopedConfig:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FormatParseError(f"Configuration is not valid UTF-8: {e}") from e

        config = ScopedConfig(scope)
        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
        section = None
        i = 0

        while i < len(lines):
            lineno = i + 1
            line = lines[i].strip(_BLANK)
            i += 1

            if line.startswith("["):
                section, line = self._parse_header(line, lineno)
                config.add_section(section)
                line = line.strip(_BLANK)

            if not line or line[0] in "#;":
                continue

            if section is None:
                raise FormatParseError("key outside of a section", lineno)

            name, sep, raw = line.partition("=")
            name = name.strip(_BLANK)
            if not _KEY_NAME.match(name):
                raise FormatParseError(f"invalid key name '{name}'", lineno)

            if sep:
                value, i = self._parse_value(raw, lines, i, lineno)
            else:
                value = "true"
            config.set(f"{section}.{name}", value)

        return config

    def marshal(self, config: ScopedConfig) -> bytes:
        out = []

        for section, keys in config.to_dict().items():
            name, sep, subsection = section.partition(".")
            if sep:
                if "\n" in subsection:
                    raise FormatParseError(f"Cannot write subsection {subsection!r}")
                escaped = subsection.replace("\\", "\\\\").replace('"', '\\"')
                out.append(f'[{name} "{escaped}"]')
            else:
                out.append(f"[{name}]")

            for key, value in keys.items():
                out.append(f"\t{key} = {_quote(value)}")

        if not out:
            return b""
        return ("\n".join(out) + "\n").encode("utf-8")

    def validate(self, config: ScopedConfig | MergedConfig) -> None:
        validate_config(config)

    def _parse_header(self, line: str, lineno: int) -> tuple[str, str]:
        """Parse a section header, returning the section and the rest of the line."""
        match = _HEADER_NAME.match(line, 1)
        if not match:
            raise FormatParseError("invalid section header", lineno)
        name = match.group().lower()
        pos = match.end()

        if pos < len(line) and line[pos] in " \t":
            if "." in name:
                raise FormatParseError(f"invalid section name '{name}'", lineno)
            while pos < len(line) and line[pos] in " \t":
                pos += 1
            if pos >= len(line) or line[pos] != '"':
                raise FormatParseError("expected quoted subsection", lineno)
            pos += 1

            chars = []
            while True:
                if pos >= len(line):
                    raise FormatParseError("unterminated subsection", lineno)
                c = line[pos]
                pos += 1
                if c == '"':
                    break
                if c == "\\":
                    if pos >= len(line):
                        raise FormatParseError("unterminated subsection", lineno)
                    c = line[pos]
                    pos += 1
                chars.append(c)
            section = f"{name}.{''.join(chars)}"
        else:
            # [branch.main] is the legacy spelling of [branch "main"]
            section = name

        if pos >= len(line) or line[pos] != "]":
            raise FormatParseError("expected ']' after section name", lineno)
        return section, line[pos + 1 :]

    def _parse_value(self, raw: str, lines: list[str], i: int, lineno: int) -> tuple[str, int]:
        """Parse a value, following backslash continuations into later lines.

        Returns:
            The value and the index of the next unconsumed line
        """
        out: list[str] = []
        text = raw
        pos = 0
        quoted = False
        pending_space = False

        while True:
            if pos >= len(text):
                if quoted:
                    raise FormatParseError("unterminated quoted value", lineno)
                break

            c = text[pos]
            pos += 1

            if c == "\\":
                if pos >= len(text):
                    if i >= len(lines):
                        break
                    text, pos = lines[i], 0
                    i += 1
                    lineno += 1
                    continue
                escape = text[pos]
                pos += 1
                if escape not in _ESCAPES:
                    raise FormatParseError(f"unknown escape sequence '\\{escape}'", lineno)
                c = _ESCAPES[escape]
            elif c == '"':
                quoted = not quoted
                if pending_space and out:
                    out.append(" ")
                pending_space = False
                continue
            elif not quoted:
                if c in "#;":
                    break
                if c in " \t":
                    pending_space = True
                    continue

            if pending_space and out:
                out.append(" ")
            pending_space = False
            out.append(c)

        return "".join(out), i


def _quote(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\b", "\\b")
    )
    if value != value.strip() or value.endswith("\r") or "#" in value or ";" in value or "  " in value:
        return f'"{escaped}"'
    return escaped


class YamlCodec:
    """YAML mapping of sections to mappings of keys to scalar values."""

    def unmarshal(self, data: bytes, scope: Scope) -> ScopedConfig:
        try:
            loaded = yaml.safe_load(data)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            raise FormatParseError(f"Invalid YAML: {e}", mark.line + 1 if mark else None) from e

        config = ScopedConfig(scope)
        if loaded is None:
            return config
        if not isinstance(loaded, dict):
            raise FormatParseError("Top level of a YAML configuration must be a mapping")

        for section, keys in loaded.items():
            config.add_section(str(section))
            if keys is None:
                continue
            if not isinstance(keys, dict):
                raise FormatParseError(f"Section '{section}' must be a mapping")
            for key, value in keys.items():
                if not _KEY_NAME.match(str(key)):
                    raise FormatParseError(f"Invalid key name '{key}' in section '{section}'")
                if isinstance(value, (dict, list)):
                    raise FormatParseError(f"Value of '{section}.{key}' must be a scalar")
                try:
                    config.set(f"{section}.{key}", "" if value is None else value)
                except ValueError as e:
                    raise FormatParseError(str(e)) from e

        return config

    def marshal(self, config: ScopedConfig) -> bytes:
        data = config.to_dict()
        if not data:
            return b""
        try:
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True).encode("utf-8")
        except yaml.YAMLError as e:
            raise FormatParseError(f"Cannot write YAML: {e}") from e

    def validate(self, config: ScopedConfig | MergedConfig) -> None:
        validate_config(config)
