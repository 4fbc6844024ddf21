"""
Memoized filesystem queries.

All disk access for a component should go through one ``FileSystem`` so it
happens once per path, is logged, and can be faked in tests by passing a
different ``FileBackend``.

Synchronous queries never raise. Any failure, from a missing file to a broken
backend, comes back as ``False``/``None``/``()``. The async read is
the exception and fails with the underlying error.

Every query caches its result per argument for the lifetime of the instance.
Nothing is invalidated on its own; use ``reset_cache``/``invalidate``.
"""

from __future__ import annotations

import asyncio
import os
import stat
from typing import Any

import yaml

from .cache import CacheRegistry, CacheStats, memoized, path_key
from .config import FsMemoSettings
from .error_handling import DocumentParseError, ErrorContext
from .storage import FileBackend, LocalFileBackend, StrPath
from .utils.logging import get_logger
from .utils.recovery import with_fallback

logger = get_logger(__name__)

OPERATIONS = (
    "file_exists",
    "read_file",
    "is_directory",
    "get_files",
    "get_folders",
    "get_yaml",
    "read_file_async",
)


def _mark_exception_retrieved(task: asyncio.Task[Any]) -> None:
    # A cached task may be dropped by reset/invalidate before anyone awaits it
    if not task.cancelled():
        task.exception()


class FileSystem:
    """Memoized, failure-tolerant view of a ``FileBackend``."""

    def __init__(
        self,
        backend: FileBackend | None = None,
        settings: FsMemoSettings | None = None,
        caches: CacheRegistry | None = None,
    ):
        self.backend = backend or LocalFileBackend()
        self.settings = settings or FsMemoSettings()
        self.caches = caches or CacheRegistry()

    def _touch(self, operation: str, path: Any) -> None:
        if self.settings.log_access:
            logger.debug(
                "filesystem_access",
                extra={"operation": operation, "path": str(path)},
            )

    @memoized(key=path_key)
    @with_fallback(lambda: False, operation_name="file_exists")
    def file_exists(self, path: StrPath) -> bool:
        """True if ``path`` can be stat'ed."""
        self._touch("stat", path)
        return bool(self.backend.stat(path))

    @memoized(key=path_key)
    @with_fallback(lambda: None, operation_name="read_file")
    def read_file(self, path: StrPath) -> str | None:
        """File contents as text, or None if it cannot be read."""
        self._touch("read", path)
        return self.backend.read_text(path, self.settings.encoding)

    @memoized(key=path_key)
    @with_fallback(lambda: False, operation_name="is_directory")
    def is_directory(self, path: StrPath) -> bool:
        self._touch("stat", path)
        return stat.S_ISDIR(self.backend.stat(path).st_mode)

    @memoized(key=path_key)
    @with_fallback(tuple, operation_name="get_files")
    def get_files(self, directory: StrPath) -> tuple[str, ...]:
        """
        Names of the non-directory entries of ``directory``.

        Test files and documentation (names containing one of
        ``settings.ignored_name_markers``) are left out.
        """
        self._touch("list", directory)
        markers = self.settings.ignored_name_markers
        return tuple(
            name
            for name in self.backend.list_dir(directory)
            if not self.is_directory(os.path.join(directory, name))
            and not any(marker in os.fsdecode(name) for marker in markers)
        )

    @memoized(key=path_key)
    @with_fallback(tuple, operation_name="get_folders")
    def get_folders(self, directory: StrPath) -> tuple[str, ...]:
        """Names of the subdirectories of ``directory``. Should only run once per directory."""
        self._touch("list", directory)
        return tuple(
            name
            for name in self.backend.list_dir(directory)
            if self.is_directory(os.path.join(directory, name))
        )

    @memoized(key=path_key)
    def get_yaml(self, base_path: StrPath) -> Any:
        """
        Parse ``<base_path>.yaml``, or ``<base_path>.yml`` if the first is unreadable.

        Extensions come from ``settings.yaml_extensions`` and are tried in order;
        the first non-empty file wins and later ones are never read. Returns
        None when no candidate can be read. Unparseable content raises
        ``DocumentParseError``.
        """
        base = os.fspath(base_path)

        for ext in self.settings.yaml_extensions:
            candidate = f"{base}{ext}"
            data = self.read_file(candidate)
            if data:
                break
        else:
            logger.debug(
                "yaml_not_found",
                extra={"path": base, "extensions": list(self.settings.yaml_extensions)},
            )
            return None

        try:
            return yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise DocumentParseError(
                "Could not parse YAML document",
                context=ErrorContext(operation="get_yaml", path=candidate),
                cause=e,
            ) from e

    @memoized(key=path_key)
    def read_file_async(self, path: StrPath) -> asyncio.Task[str]:
        """
        Schedule a non-blocking read of ``path`` and return the task.

        Must be called from a running event loop. The task (pending or settled)
        is what gets cached: repeat calls share it instead of reading again,
        including when it failed.
        """
        loop = asyncio.get_running_loop()
        self._touch("read_async", path)
        task = loop.create_task(self._read_async(path))
        task.add_done_callback(_mark_exception_retrieved)
        return task

    async def _read_async(self, path: StrPath) -> str:
        try:
            return await self.backend.read_text_async(path, self.settings.encoding)
        except (OSError, ValueError) as e:
            logger.debug(
                "async_read_failed",
                extra={"path": str(path), "error": str(e), "error_type": type(e).__name__},
            )
            raise

    def reset_cache(self, operation: str | None = None) -> None:
        """Forget cached results for one operation, or for all of them."""
        if operation is not None and operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")
        self.caches.reset(operation)

    def invalidate(self, operation: str, path: StrPath) -> bool:
        """Forget the cached result of ``operation`` for ``path``."""
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")
        return self.caches.invalidate(operation, path_key(path))

    def cache_stats(self) -> dict[str, CacheStats]:
        return self.caches.stats()
