"""
Raw storage access behind the memoized filesystem layer.

Backends do no caching and no error suppression: they raise whatever the
underlying storage raises. ``FileSystem`` owns both concerns.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any

import aiofiles

StrPath = str | os.PathLike[str]


class FileBackend(ABC):
    """
    Base class for storage backends.
    Synchronous calls block; ``read_text_async`` is the only coroutine.
    """

    @abstractmethod
    def stat(self, path: StrPath) -> Any:
        """Return a stat result exposing ``st_mode``."""
        pass

    @abstractmethod
    def read_text(self, path: StrPath, encoding: str) -> str:
        """Read a whole file as text."""
        pass

    @abstractmethod
    def list_dir(self, path: StrPath) -> list[str]:
        """Return the entry names of a directory (one level, unsorted)."""
        pass

    @abstractmethod
    async def read_text_async(self, path: StrPath, encoding: str) -> str:
        """Read a whole file as text without blocking the event loop."""
        pass


class LocalFileBackend(FileBackend):
    """Backend for the local disk."""

    def stat(self, path: StrPath) -> os.stat_result:
        return os.stat(path)

    def read_text(self, path: StrPath, encoding: str) -> str:
        with open(path, encoding=encoding) as f:
            return f.read()

    def list_dir(self, path: StrPath) -> list[str]:
        return os.listdir(path)

    async def read_text_async(self, path: StrPath, encoding: str) -> str:
        async with aiofiles.open(path, "r", encoding=encoding) as f:
            return await f.read()
