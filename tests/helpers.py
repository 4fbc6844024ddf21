"""Test doubles for the filesystem layer and the module resolver."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from importlib.machinery import ModuleSpec
from types import ModuleType
from typing import Any

from fsmemo.resolver import ModuleLocation
from fsmemo.storage import FileBackend


@dataclass
class FakeStat:
    st_mode: int


class RecordingBackend(FileBackend):
    """
    In-memory backend that records every call.

    ``files`` maps path -> contents, ``dirs`` maps path -> entry names and
    ``errors`` maps path -> exception raised by any call on that path.
    """

    def __init__(
        self,
        files: dict[str, str] | None = None,
        dirs: dict[str, list[str]] | None = None,
        errors: dict[str, BaseException] | None = None,
    ):
        self.files = dict(files or {})
        self.dirs = dict(dirs or {})
        self.errors = dict(errors or {})
        self.calls: list[tuple[str, Any]] = []

    def _record(self, operation: str, path: Any) -> str:
        self.calls.append((operation, path))
        key = os.fspath(path)
        if key in self.errors:
            raise self.errors[key]
        return key

    def count(self, operation: str, path: str | None = None) -> int:
        return sum(
            1
            for op, p in self.calls
            if op == operation and (path is None or os.fspath(p) == path)
        )

    def stat(self, path):
        key = self._record("stat", path)
        if key in self.dirs:
            return FakeStat(stat.S_IFDIR | 0o755)
        if key in self.files:
            return FakeStat(stat.S_IFREG | 0o644)
        raise FileNotFoundError(2, "No such file or directory", key)

    def read_text(self, path, encoding):
        key = self._record("read_text", path)
        if key in self.dirs:
            raise IsADirectoryError(21, "Is a directory", key)
        if key not in self.files:
            raise FileNotFoundError(2, "No such file or directory", key)
        return self.files[key]

    def list_dir(self, path):
        key = self._record("list_dir", path)
        if key not in self.dirs:
            raise FileNotFoundError(2, "No such file or directory", key)
        return list(self.dirs[key])

    async def read_text_async(self, path, encoding):
        key = self._record("read_text_async", path)
        if key not in self.files:
            raise FileNotFoundError(2, "No such file or directory", key)
        return self.files[key]


class FakeResolver:
    """
    Module resolver backed by a dict of name -> module.

    Names listed in ``failures`` raise that exception from ``load``.
    """

    def __init__(
        self,
        modules: dict[str, ModuleType] | None = None,
        failures: dict[str, BaseException] | None = None,
    ):
        self.modules = dict(modules or {})
        self.failures = dict(failures or {})
        self.resolved: list[str] = []
        self.loaded: list[str] = []

    def resolve(self, name: str) -> ModuleLocation | None:
        self.resolved.append(name)
        if name in self.modules or name in self.failures:
            return ModuleLocation(name=name, spec=ModuleSpec(name, None))
        return None

    def load(self, location: ModuleLocation) -> ModuleType:
        self.loaded.append(location.name)
        if location.name in self.failures:
            raise self.failures[location.name]
        return self.modules[location.name]


def make_module(name: str, **attrs: Any) -> ModuleType:
    module = ModuleType(name)
    for key, value in attrs.items():
        setattr(module, key, value)
    return module
