"""
Best-effort dynamic module lookup.

``ModuleFinder.try_resolve_module`` loads a module if it can be found and
returns None if it cannot. Anything other than "not found" is raised as
``ModuleLoadError``, including failures of a parent package import. The lookup
mechanism is a ``ModuleResolver``, so tests can pass a fake instead of
touching the real import system.
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import os
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from importlib.machinery import ModuleSpec
from pathlib import Path
from types import ModuleType
from typing import Protocol, runtime_checkable

from .cache import CacheRegistry, CacheStats, memoized, path_key
from .error_handling import ErrorContext, ModuleLoadError
from .filesystem import FileSystem
from .utils.logging import get_logger

logger = get_logger(__name__)

# Modules loaded from a file path are registered in sys.modules under this prefix
FILE_MODULE_PREFIX = "_fsmemo_file_"


@dataclass(frozen=True)
class ModuleLocation:
    """A module that was found but not yet loaded."""

    name: str
    spec: ModuleSpec
    from_path: bool = False

    @property
    def origin(self) -> str | None:
        return self.spec.origin


@runtime_checkable
class ModuleResolver(Protocol):
    """Protocol for module lookup mechanisms."""

    def resolve(self, name: str) -> ModuleLocation | None:
        """Locate a module, or return None if it does not exist."""
        ...

    def load(self, location: ModuleLocation) -> ModuleType:
        """Load a located module."""
        ...


def _looks_like_path(name: str) -> bool:
    return (
        name.startswith(".")
        or os.sep in name
        or (os.altsep is not None and os.altsep in name)
        or name.endswith(".py")
    )


def _file_module_name(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    stem = "".join(c if c.isalnum() else "_" for c in path.stem)
    return f"{FILE_MODULE_PREFIX}{stem}_{digest}"


def _load_error(
    module: str, origin: str | None, operation: str, error: Exception
) -> ModuleLoadError:
    logger.warning(
        "module_load_failed",
        extra={
            "module_name": module,
            "origin": origin,
            "operation": operation,
            "error": str(error),
            "error_type": type(error).__name__,
        },
    )
    return ModuleLoadError(
        f"Failed to load module {module}",
        context=ErrorContext(operation=operation, path=origin, metadata={"module": module}),
        cause=error,
    )


class ImportlibResolver:
    """
    Resolve modules with the host import system.

    Names starting with ``.``, containing a path separator or ending in ``.py``
    are looked up on disk relative to ``base_dir``: the file itself, then
    ``<name>.py``, then ``<name>/__init__.py``. Other names are dotted module
    names.
    """

    def __init__(self, filesystem: FileSystem | None = None, base_dir: str | Path | None = None):
        self.filesystem = filesystem or FileSystem()
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def resolve(self, name: str) -> ModuleLocation | None:
        if _looks_like_path(name):
            return self._resolve_path(name)
        return self._resolve_dotted(name)

    def _resolve_path(self, name: str) -> ModuleLocation | None:
        path = Path(name)
        if not path.is_absolute():
            path = (self.base_dir or Path.cwd()) / path

        candidates = [path] if path.suffix == ".py" else []
        if path.name:
            candidates.append(path.with_name(path.name + ".py"))
        candidates.append(path / "__init__.py")

        for candidate in candidates:
            if self.filesystem.file_exists(candidate) and not self.filesystem.is_directory(
                candidate
            ):
                resolved = candidate.resolve()
                module_name = _file_module_name(resolved)
                spec = importlib.util.spec_from_file_location(module_name, resolved)
                if spec is None:
                    return None
                return ModuleLocation(name=module_name, spec=spec, from_path=True)

        return None

    def _resolve_dotted(self, name: str) -> ModuleLocation | None:
        try:
            spec = importlib.util.find_spec(name)
        except Exception as e:
            # A missing parent package means the module is missing too. Any
            # other failure comes from importing a parent package.
            if (
                isinstance(e, ModuleNotFoundError)
                and e.name
                and (name == e.name or name.startswith(f"{e.name}."))
            ):
                return None
            raise _load_error(name, None, "resolve", e) from e

        if spec is None:
            return None
        return ModuleLocation(name=spec.name, spec=spec)

    def load(self, location: ModuleLocation) -> ModuleType:
        try:
            if not location.from_path:
                return importlib.import_module(location.name)

            existing = sys.modules.get(location.name)
            if existing is not None:
                return existing

            module = importlib.util.module_from_spec(location.spec)
            sys.modules[location.name] = module
            try:
                location.spec.loader.exec_module(module)
            except BaseException:
                sys.modules.pop(location.name, None)
                raise
            return module
        except Exception as e:
            raise _load_error(location.name, location.origin, "load", e) from e


class ModuleFinder:
    """Memoized "load it if it exists" lookup over a ``ModuleResolver``."""

    def __init__(
        self,
        resolver: ModuleResolver | None = None,
        caches: CacheRegistry | None = None,
    ):
        self.resolver = resolver or ImportlibResolver()
        self.caches = caches or CacheRegistry()

    @memoized(key=path_key)
    def try_resolve_module(self, name: str) -> ModuleType | None:
        """
        Load a module, or return None if it does not exist.

        Raises ``ModuleLoadError`` if it exists but fails to load.
        """
        location = self.resolver.resolve(os.fspath(name))
        if location is None:
            logger.debug("module_not_found", extra={"module_name": str(name)})
            return None
        return self.resolver.load(location)

    def try_resolve_each(self, candidates: Iterable[str]) -> ModuleType | None:
        """
        Return the first module that resolves, trying candidates in order.

        Each candidate is tried at most once and the search stops at the first
        hit. The caller's sequence is not modified.
        """
        for candidate in candidates:
            module = self.try_resolve_module(candidate)
            if module is not None:
                return module
        return None

    def reset_cache(self) -> None:
        self.caches.reset()

    def cache_stats(self) -> dict[str, CacheStats]:
        return self.caches.stats()
