"""
Error handling for fsmemo.

Structured exceptions for failures that must reach the caller.
"""

from .exceptions import (
    ConfigurationError,
    DocumentParseError,
    ErrorContext,
    FsMemoError,
    ModuleLoadError,
)

__all__ = [
    "ErrorContext",
    "FsMemoError",
    "ModuleLoadError",
    "DocumentParseError",
    "ConfigurationError",
]
