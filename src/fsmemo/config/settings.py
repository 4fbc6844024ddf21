"""
Settings for the filesystem access layer.

Values come from defaults or from ``FSMEMO_*`` environment variables:

- FSMEMO_ENCODING: text encoding for file reads (default ``utf-8``)
- FSMEMO_IGNORED_MARKERS: comma separated name fragments excluded by ``get_files``
- FSMEMO_YAML_EXTENSIONS: comma separated extensions tried by ``get_yaml``, in order
- FSMEMO_LOG_ACCESS: log every raw filesystem touch at debug level
"""

from __future__ import annotations

import codecs
import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..error_handling import ConfigurationError, ErrorContext

ENV_PREFIX = "FSMEMO_"


def _split_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


class FsMemoSettings(BaseModel):
    """Validated settings shared by the filesystem layer and the resolver."""

    model_config = ConfigDict(frozen=True)

    encoding: str = Field("utf-8", description="Encoding used to decode file contents")
    ignored_name_markers: tuple[str, ...] = Field(
        (".test.", ".md"),
        description="Entries whose name contains any marker are left out of get_files",
    )
    yaml_extensions: tuple[str, ...] = Field(
        (".yaml", ".yml"), description="Extensions tried by get_yaml, first readable wins"
    )
    log_access: bool = Field(True, description="Log raw filesystem access at debug level")

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}") from None
        return v

    @field_validator("ignored_name_markers")
    @classmethod
    def validate_markers(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if any(not marker for marker in v):
            raise ValueError("Ignored name markers cannot be empty strings")
        return v

    @field_validator("yaml_extensions")
    @classmethod
    def validate_yaml_extensions(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("At least one YAML extension is required")
        for ext in v:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"YAML extension must look like '.yaml', got {ext!r}")
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> FsMemoSettings:
        """Build settings from ``FSMEMO_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        if env.get(f"{ENV_PREFIX}ENCODING"):
            values["encoding"] = env[f"{ENV_PREFIX}ENCODING"]

        if f"{ENV_PREFIX}IGNORED_MARKERS" in env:
            values["ignored_name_markers"] = _split_list(env[f"{ENV_PREFIX}IGNORED_MARKERS"])

        if env.get(f"{ENV_PREFIX}YAML_EXTENSIONS"):
            values["yaml_extensions"] = _split_list(env[f"{ENV_PREFIX}YAML_EXTENSIONS"])

        if env.get(f"{ENV_PREFIX}LOG_ACCESS"):
            values["log_access"] = env[f"{ENV_PREFIX}LOG_ACCESS"].strip().lower()

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid fsmemo settings in environment",
                context=ErrorContext(
                    operation="settings.from_env",
                    metadata={"variables": sorted(k for k in env if k.startswith(ENV_PREFIX))},
                ),
                cause=e,
            ) from e
