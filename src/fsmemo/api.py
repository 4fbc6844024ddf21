"""
Process-wide default instances.

Components that do not need their own ``FileSystem``/``ModuleFinder`` use
these functions. Tests that need isolation should build their own instances
(or call ``reset_caches()`` between cases).

The async read caches ``asyncio.Task`` objects, which belong to the loop that
created them; reset the caches when switching event loops.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import ModuleType

from .config import FsMemoSettings
from .filesystem import FileSystem
from .resolver import ImportlibResolver, ModuleFinder

default_filesystem = FileSystem(settings=FsMemoSettings.from_env())
default_finder = ModuleFinder(ImportlibResolver(default_filesystem))

file_exists = default_filesystem.file_exists
read_file = default_filesystem.read_file
is_directory = default_filesystem.is_directory
get_files = default_filesystem.get_files
get_folders = default_filesystem.get_folders
get_yaml = default_filesystem.get_yaml
read_file_async = default_filesystem.read_file_async
try_resolve_module = default_finder.try_resolve_module


def try_resolve_each(candidates: Iterable[str]) -> ModuleType | None:
    """Return the first of ``candidates`` that resolves to a module, or None."""
    return default_finder.try_resolve_each(candidates)


def reset_caches() -> None:
    """Forget every cached filesystem and module lookup result."""
    default_filesystem.reset_cache()
    default_finder.reset_cache()
