"""Storage adapters for tagcache (async only)."""

from contextlib import suppress

from tagcache.adapters.base import AsyncBatch, AsyncStorageAdapter
from tagcache.adapters.memory import AsyncMemoryAdapter

# Optional adapters - only available when dependencies are installed
with suppress(ImportError):
    from tagcache.adapters.redis import AsyncRedisAdapter

__all__ = [
    "AsyncBatch",
    "AsyncMemoryAdapter",
    "AsyncRedisAdapter",
    "AsyncStorageAdapter",
]
