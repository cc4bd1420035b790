"""TagCache - cache data with tags and invalidate by tag.

Under the hood each tag is a set of cache keys, and each key's data is a
JSON string:
- `tags:user-123` = {"thread-345", "thread-234", ...}
- `data:thread-345` = '{"id": "thread-345", "content": {"title": "Hello"}}'
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from itertools import chain
from types import TracebackType

from tagcache.adapters.base import AsyncStorageAdapter
from tagcache.codec import deserialize_all, serialize
from tagcache.duration import parse_timeout
from tagcache.keys import data_key, tag_key
from tagcache.types import JSONValue, TagCacheOptions, Timeout


class TagCache:
    """Async tag-indexed cache.

    Holds no mutable state of its own besides the adapter handle, so one
    instance can be shared by concurrent tasks as long as the adapter can.
    """

    def __init__(
        self,
        options: TagCacheOptions | None = None,
        *,
        adapter: AsyncStorageAdapter | None = None,
    ) -> None:
        self._options = options if options is not None else TagCacheOptions()
        self._default_timeout = (
            parse_timeout(self._options.default_timeout)
            if self._options.default_timeout is not None
            else None
        )
        if adapter is None:
            from tagcache.adapters.redis import AsyncRedisAdapter

            adapter = AsyncRedisAdapter.from_options(self._options.redis)
        self._adapter = adapter

    @property
    def options(self) -> TagCacheOptions:
        return self._options

    @property
    def adapter(self) -> AsyncStorageAdapter:
        return self._adapter

    async def get(self, *keys: str) -> JSONValue | list[JSONValue]:
        """Get the data stored under one or more keys.

        A single key returns its value directly; several keys return a list
        aligned with the arguments. Missing or expired entries are None.
        """
        if not keys:
            raise ValueError("get() requires at least one key")
        raws = await self._adapter.get_many([data_key(key) for key in keys])
        values = deserialize_all(raws)
        # Special case for single element gets
        if len(keys) == 1:
            return values[0]
        return values

    async def set(
        self,
        key: str,
        data: JSONValue,
        tags: Sequence[str] = (),
        *,
        timeout: Timeout | None = None,
    ) -> None:
        """Store data under key and add key to each tag.

        Everything is written in one transaction, so if the backend rejects
        any command nothing is written.
        """
        payload = serialize(data)
        ttl = parse_timeout(timeout) if timeout is not None else self._default_timeout

        batch = self._adapter.transaction()
        for tag in tags:
            batch.add_member(tag_key(tag), key)
        batch.set_value(data_key(key), payload, ttl)
        await batch.execute()

    async def invalidate(self, *tags: str) -> None:
        """Delete the data of every key carrying any of the tags, then the tags.

        1. Get all the keys associated with the tags (`tags:<tag>`)
        2. Delete the data of each of those keys (`data:<key>`)
        3. Delete the tags themselves (`tags:<tag>`)

        Deletes are idempotent, so invalidating a tag twice is harmless.
        """
        if not tags:
            return
        members = await asyncio.gather(
            *(self._adapter.get_members(tag_key(tag)) for tag in tags)
        )

        batch = self._adapter.pipeline()
        for key in chain.from_iterable(members):
            batch.delete(data_key(key))
        for tag in tags:
            batch.delete(tag_key(tag))
        await batch.execute()

    async def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        await self._adapter.disconnect()

    async def __aenter__(self) -> TagCache:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.disconnect()
