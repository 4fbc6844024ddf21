from .logging import (
    StructuredFormatter,
    StructuredLogger,
    clear_execution_context,
    get_logger,
    set_execution_context,
    setup_structured_logging,
)
from .recovery import DEFAULT_SUPPRESSED_ERRORS, with_fallback

__all__ = [
    # Logging
    "StructuredLogger",
    "StructuredFormatter",
    "get_logger",
    "setup_structured_logging",
    "set_execution_context",
    "clear_execution_context",
    # Recovery
    "DEFAULT_SUPPRESSED_ERRORS",
    "with_fallback",
]
