"""tagcache - Tag-indexed invalidation over a key-value store."""

from contextlib import suppress

# Adapters (async only)
from tagcache.adapters import (
    AsyncBatch,
    AsyncMemoryAdapter,
    AsyncStorageAdapter,
)

# Interchange codec
from tagcache.codec import deserialize, deserialize_all, serialize

# Duration parsing
from tagcache.duration import parse_timeout

# Errors
from tagcache.errors import BatchRejectedError, TagCacheError

# Cache
from tagcache.tag_cache import TagCache

# Core types
from tagcache.types import JSONValue, TagCacheOptions, Timeout

# Optional adapter imports - only available when dependencies are installed
with suppress(ImportError):
    from tagcache.adapters import AsyncRedisAdapter

__version__ = "0.1.0"

__all__ = [
    "AsyncBatch",
    "AsyncMemoryAdapter",
    "AsyncRedisAdapter",
    "AsyncStorageAdapter",
    "BatchRejectedError",
    "JSONValue",
    "TagCache",
    "TagCacheError",
    "TagCacheOptions",
    "Timeout",
    "deserialize",
    "deserialize_all",
    "parse_timeout",
    "serialize",
]
