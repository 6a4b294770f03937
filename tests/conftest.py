"""Pytest configuration and fixtures shared by the utext tests."""

from collections.abc import Iterator

import pytest

from utext import config
from utext.patterns import clear_caches


@pytest.fixture(autouse=True)
def restore_default_encoding() -> Iterator[None]:
    """Reset the shared encoding after each test so tests stay independent."""
    yield
    config.set_encoding(config.DEFAULT_ENCODING)


@pytest.fixture
def fresh_pattern_cache() -> Iterator[None]:
    """Provide empty pattern caches for tests that count compilations."""
    clear_caches()
    yield
    clear_caches()
