"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from tests.helpers import ClosableBuffer


@pytest.fixture
def buffer() -> ClosableBuffer:
    """Empty in-memory stream that records close()."""
    return ClosableBuffer()


@pytest.fixture
def sample_payload() -> bytes:
    """Sample binary payload for testing."""
    return b"Hello, delimited world!"
