"""Storage backends for fsmemo."""

from .backend import FileBackend, LocalFileBackend, StrPath

__all__ = ["FileBackend", "LocalFileBackend", "StrPath"]
