"""Shared fixtures for scopeconf tests."""

import io
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from scopeconf import ConfigPaths
from scopeconf import Scope
from scopeconf.exceptions import ScopeNotFoundError


class RecordingStream(io.BytesIO):
    """Writable stream that stores its contents in the stub store on close."""

    def __init__(self, sink: dict, scope: Scope, fail_writes: bool = False):
        super().__init__()
        self.sink = sink
        self.scope = scope
        self.fail_writes = fail_writes

    def write(self, data):
        if self.fail_writes:
            raise OSError("No space left on device")
        return super().write(data)

    def close(self):
        if not self.closed:
            self.sink[self.scope] = self.getvalue()
        super().close()


class ReadStream(io.BytesIO):
    def __init__(self, data: bytes, fail_reads: bool = False):
        super().__init__(data)
        self.fail_reads = fail_reads

    def read(self, *args):
        if self.fail_reads:
            raise OSError("Input/output error")
        return super().read(*args)


class StubStore:
    """In-memory scope store recording every writer it opens."""

    def __init__(self, data: dict[Scope, bytes] | None = None):
        self.data = dict(data or {})
        self.open_errors: dict[Scope, Exception] = {}
        self.opened: list[Scope] = []
        self.streams: list[io.BytesIO] = []
        self.fail_reads = False
        self.fail_writes = False

    def _read(self, scope: Scope) -> bytes:
        if scope not in self.data:
            raise ScopeNotFoundError(f"No {scope.value} configuration")
        return self.data[scope]

    def system_config(self) -> bytes:
        return self._read(Scope.SYSTEM)

    def user_config(self) -> bytes:
        return self._read(Scope.USER)

    def config(self):
        stream = ReadStream(self._read(Scope.LOCAL), self.fail_reads)
        self.streams.append(stream)
        return stream

    def _writer(self, scope: Scope):
        self.opened.append(scope)
        if scope in self.open_errors:
            raise self.open_errors[scope]
        stream = RecordingStream(self.data, scope, self.fail_writes)
        self.streams.append(stream)
        return stream

    def system_config_writer(self):
        return self._writer(Scope.SYSTEM)

    def user_config_writer(self):
        return self._writer(Scope.USER)

    def local_config_writer(self):
        return self._writer(Scope.LOCAL)


@pytest.fixture
def stub_store():
    """Empty in-memory scope store."""
    return StubStore()


@pytest.fixture
def temp_paths():
    """Create temporary paths for all three scopes."""
    with TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)
        yield ConfigPaths(
            system=tmpdir_path / "etc" / "gitconfig",
            user=tmpdir_path / "home" / ".gitconfig",
            local=tmpdir_path / "repo" / ".git" / "config",
        )
