"""
Memoization caches owned by the components that use them.

Each memoized operation gets its own ``MemoCache``: a plain mapping from call
argument to result with no eviction, no TTL and no size bound. Entries live
until ``reset()``/``invalidate()`` is called on the cache (or its registry)
or the process exits.
"""

from __future__ import annotations

import inspect
import logging
import os
from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass
from functools import wraps
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


@dataclass
class CacheStats:
    """Cache performance statistics."""

    hits: int = 0
    misses: int = 0
    invalidations: int = 0
    resets: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class MemoCache:
    """Argument -> result mapping for a single memoized operation."""

    def __init__(self, name: str):
        self.name = name
        self._entries: dict[Hashable, Any] = {}
        self.stats = CacheStats()

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        """
        Return the stored result for ``key``, computing and storing it on a miss.

        Exceptions raised by ``compute`` propagate and leave the cache untouched.
        """
        value = self._entries.get(key, _MISSING)
        if value is not _MISSING:
            self.stats.hits += 1
            return value

        self.stats.misses += 1
        value = compute()
        self._entries[key] = value
        return value

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def invalidate(self, key: Hashable) -> bool:
        """Drop one entry. Returns True if it was present."""
        if key in self._entries:
            del self._entries[key]
            self.stats.invalidations += 1
            logger.debug(f"Cache {self.name}: invalidated {key!r}")
            return True
        return False

    def reset(self) -> None:
        """Drop every entry."""
        self._entries.clear()
        self.stats.resets += 1
        logger.debug(f"Cache {self.name}: reset")

    def keys(self) -> list[Hashable]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MemoCache(name={self.name!r}, entries={len(self._entries)})"


class CacheRegistry:
    """One ``MemoCache`` per operation name, created on first use."""

    def __init__(self) -> None:
        self._caches: dict[str, MemoCache] = {}

    def cache_for(self, name: str) -> MemoCache:
        cache = self._caches.get(name)
        if cache is None:
            cache = self._caches[name] = MemoCache(name)
        return cache

    def reset(self, name: str | None = None) -> None:
        """Reset one operation's cache, or all of them when ``name`` is None."""
        if name is None:
            for cache in self._caches.values():
                cache.reset()
        elif name in self._caches:
            self._caches[name].reset()

    def invalidate(self, name: str, key: Hashable) -> bool:
        cache = self._caches.get(name)
        return cache.invalidate(key) if cache is not None else False

    def stats(self) -> dict[str, CacheStats]:
        return {name: cache.stats for name, cache in self._caches.items()}

    def __iter__(self) -> Iterator[MemoCache]:
        return iter(self._caches.values())

    def __contains__(self, name: object) -> bool:
        return name in self._caches


def path_key(value: Any) -> Hashable:
    """Cache key for path arguments: ``Path('a')`` and ``'a'`` share an entry."""
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return value


def memoized(
    key: Callable[[Any], Hashable] | None = None,
) -> Callable[[Callable[[Any, Any], T]], Callable[[Any, Any], T]]:
    """
    Memoize a single-argument method in the owner's ``caches`` registry.

    The owner must expose ``caches: CacheRegistry``; results are stored in
    ``caches.cache_for(<method name>)`` keyed by ``key(arg)`` (or ``arg``).
    The wrapper accepts the argument positionally or by its parameter name.
    """

    def decorator(func: Callable[[Any, Any], T]) -> Callable[[Any, Any], T]:
        name = func.__name__
        signature = inspect.signature(func)
        _, param = list(signature.parameters)[:2]

        @wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            arg = bound.arguments[param]
            cache_key = key(arg) if key is not None else arg
            return self.caches.cache_for(name).get_or_compute(
                cache_key, lambda: func(self, arg)
            )

        wrapper.cache_name = name  # type: ignore[attr-defined]
        return wrapper

    return decorator
