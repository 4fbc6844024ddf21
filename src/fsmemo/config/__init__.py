"""Configuration for fsmemo."""

from .settings import ENV_PREFIX, FsMemoSettings

__all__ = ["ENV_PREFIX", "FsMemoSettings"]
