"""Structured logging so every filesystem touch is machine-parseable."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import MutableMapping
from contextvars import ContextVar
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Context for the current caller (e.g. which component is loading files)
execution_context: ContextVar[dict[str, Any]] = ContextVar(
    "execution_context", default={}
)

_RESERVED_FIELDS = frozenset(
    (
        "name",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "msg",
        "args",
        "exc_info",
        "exc_text",
        "stack_info",
    )
)


class StructuredLogger(logging.LoggerAdapter[logging.Logger]):
    """Logger adapter that renders each message and its extras as one JSON object."""

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None):
        super().__init__(logger, extra or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        """Process log message to add structured context."""
        try:
            log_entry: dict[str, Any] = {
                "timestamp": datetime.now(UTC).isoformat(),
                "message": msg,
                "module": self.logger.name,
            }

            ctx = execution_context.get()
            if ctx:
                log_entry["context"] = ctx

            if self.extra:
                log_entry.update(self.extra)

            if "extra" in kwargs:
                extra_data = kwargs["extra"] or {}
                log_entry.update(
                    {k: v for k, v in extra_data.items() if k not in _RESERVED_FIELDS}
                )
                kwargs = {k: v for k, v in kwargs.items() if k != "extra"}

            return json.dumps(log_entry, default=str), kwargs
        except (TypeError, ValueError) as e:
            return f"Structured logging error: {e} - Original message: {msg}", kwargs


class StructuredFormatter(logging.Formatter):
    """Pass through messages already rendered by StructuredLogger, wrap the rest."""

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, str) and record.msg.startswith("{"):
            try:
                payload = json.loads(record.getMessage())
            except json.JSONDecodeError:
                payload = None
            if isinstance(payload, dict):
                payload.setdefault("level", record.levelname)
                return json.dumps(payload, default=str)
        return json.dumps(
            {
                "timestamp": datetime.now(UTC).isoformat(),
                "level": record.levelname,
                "module": record.name,
                "message": record.getMessage(),
            }
        )


def setup_structured_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    include_stdout: bool = True,
) -> None:
    """Set up structured logging for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    formatter = StructuredFormatter()

    if include_stdout:
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setFormatter(formatter)
        root_logger.addHandler(stdout_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(logging.getLogger(name))


def set_execution_context(**kwargs: Any) -> None:
    """Set execution context for current async context."""
    ctx = dict(execution_context.get())
    ctx.update(kwargs)
    execution_context.set(ctx)


def clear_execution_context() -> None:
    """Clear execution context."""
    execution_context.set({})
