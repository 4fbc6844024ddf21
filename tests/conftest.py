"""Shared pytest fixtures for fsmemo tests."""

import logging

import pytest

import fsmemo
from fsmemo import FileSystem, FsMemoSettings

from helpers import RecordingBackend


@pytest.fixture(autouse=True)
def _reset_default_caches():
    """Keep the process-wide caches from leaking between tests."""
    fsmemo.reset_caches()
    yield
    fsmemo.reset_caches()


@pytest.fixture
def backend():
    """Empty in-memory backend; tests fill in files, dirs and errors."""
    return RecordingBackend()


@pytest.fixture
def fs(backend):
    """FileSystem over the recording backend."""
    return FileSystem(backend=backend)


@pytest.fixture
def disk_fs():
    """FileSystem over the real local disk."""
    return FileSystem(settings=FsMemoSettings())


@pytest.fixture
def debug_logs(caplog):
    """Capture fsmemo debug logging."""
    caplog.set_level(logging.DEBUG, logger="fsmemo")
    return caplog
