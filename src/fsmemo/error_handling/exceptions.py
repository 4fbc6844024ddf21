"""
Exception hierarchy for fsmemo.

Synchronous filesystem queries never raise these: they collapse failures to
falsy results. They surface where failure must stay distinguishable, i.e.
module loading, document parsing and configuration.
"""

import time
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ErrorContext:
    """Where an error happened."""

    timestamp: float = field(default_factory=time.time)
    operation: str | None = None
    path: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "timestamp": self.timestamp,
            "operation": self.operation,
            "path": self.path,
            "metadata": self.metadata,
        }


class FsMemoError(Exception):
    """Base exception for all fsmemo errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)

        self.message = message
        self.context = context or ErrorContext()
        self.cause = cause

        if cause:
            self.__cause__ = cause

    @property
    def error_code(self) -> str:
        return f"FSMEMO_{self.__class__.__name__.upper()}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_type": self.__class__.__name__,
            "cause": repr(self.cause) if self.cause else None,
            "context": self.context.to_dict(),
        }

    def __str__(self) -> str:
        if self.context.path:
            return f"{self.message} (path: {self.context.path})"
        return self.message


class ModuleLoadError(FsMemoError):
    """A module was found but could not be loaded."""


class DocumentParseError(FsMemoError):
    """A structured document was read but could not be parsed."""


class ConfigurationError(FsMemoError):
    """Settings are missing or invalid."""
