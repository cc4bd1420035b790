"""Shared pytest fixtures."""

import pytest

from tagcache import AsyncMemoryAdapter, TagCache


@pytest.fixture
def async_adapter() -> AsyncMemoryAdapter:
    """Create a fresh AsyncMemoryAdapter for each test."""
    return AsyncMemoryAdapter()


@pytest.fixture
def cache(async_adapter: AsyncMemoryAdapter) -> TagCache:
    """Create a TagCache backed by the memory adapter."""
    return TagCache(adapter=async_adapter)
