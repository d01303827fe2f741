"""
Pytest configuration and shared fixtures for toonconv tests.
"""

import pytest

from toonconv.config import EncodeConfig
from toonconv.formatter import ToonFormatter


@pytest.fixture
def config():
    """Default encode configuration."""
    return EncodeConfig()


@pytest.fixture
def formatter(config):
    """Formatter with the default configuration."""
    return ToonFormatter(config)


@pytest.fixture
def users():
    """Factory fixture for uniform user records."""
    def _make(count: int = 3) -> list[dict]:
        return [
            {"id": i, "name": f"User{i}", "active": i % 2 == 0}
            for i in range(1, count + 1)
        ]
    return _make


@pytest.fixture
def nested():
    """Factory fixture for a chain of single-key objects ``depth`` levels deep."""
    def _make(depth: int, leaf=1):
        value = leaf
        for _ in range(depth):
            value = {"a": value}
        return value
    return _make
