"""Result normalization for best-effort filesystem queries."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from .logging import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Synchronous queries never raise: any error from the storage layer collapses
# to the fallback, not just OSError. KeyboardInterrupt and SystemExit still
# propagate.
DEFAULT_SUPPRESSED_ERRORS: tuple[type[BaseException], ...] = (Exception,)


def with_fallback(
    fallback: Callable[[], Any],
    *,
    operation_name: str | None = None,
    errors: tuple[type[BaseException], ...] = DEFAULT_SUPPRESSED_ERRORS,
) -> Callable[[F], F]:
    """Decorator returning ``fallback()`` when the wrapped call raises one of ``errors``.

    ``fallback`` is a factory so each failed call gets a fresh default.
    Exceptions outside ``errors`` propagate unchanged.
    """

    def decorator(func: F) -> F:
        operation = operation_name or f"{func.__module__}.{func.__name__}"

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except errors as e:
                logger.debug(
                    f"Using fallback value for {operation}",
                    extra={
                        "operation": operation,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )
                return fallback()

        return wrapper  # type: ignore

    return decorator
