"""Redis storage adapter."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

import redis.asyncio
from redis.exceptions import ExecAbortError, ResponseError

from tagcache.errors import BatchRejectedError


def _decode(data: bytes | str) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8")
    return data


class _RedisBatch:
    """Queued commands on a redis-py pipeline."""

    def __init__(self, pipeline: Any, *, atomic: bool) -> None:
        self._pipeline = pipeline
        self._atomic = atomic
        self._rejected: str | None = None

    def add_member(self, key: str, member: str) -> None:
        self._pipeline.sadd(key, member)

    def set_value(self, key: str, value: str, ttl: float | None = None) -> None:
        if ttl is None:
            self._pipeline.set(key, value)
        elif not math.isfinite(ttl) or (px := round(ttl * 1000)) <= 0:
            # Redis only reports this once EXEC runs, after the other
            # commands in the block have already applied
            self._rejected = f"invalid expire time for {key!r}: {ttl!r}"
        else:
            # PX keeps sub-second timeouts; EX only takes whole seconds
            self._pipeline.set(key, value, px=px)

    def delete(self, key: str) -> None:
        self._pipeline.delete(key)

    async def execute(self) -> None:
        if self._rejected is not None:
            raise BatchRejectedError(self._rejected)
        if not self._atomic:
            await self._pipeline.execute()
            return
        try:
            await self._pipeline.execute()
        except ResponseError as e:
            # On EXECABORT redis-py raises the queueing error chained to the
            # ExecAbortError; errors raised inside EXEC leave the rest applied
            aborted = isinstance(e, ExecAbortError) or isinstance(
                e.__cause__, ExecAbortError
            )
            if aborted:
                raise BatchRejectedError(str(e)) from e
            raise


class AsyncRedisAdapter:
    """Async Redis storage adapter.

    Uses MGET for bulk reads, SMEMBERS for tag membership, MULTI/EXEC for
    atomic writes and a plain pipeline for fan-out deletes.
    """

    def __init__(self, client: Any) -> None:  # redis.asyncio.Redis
        self._client = client

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> AsyncRedisAdapter:
        """Create an adapter with a new client built from connection options."""
        return cls(redis.asyncio.Redis(**options))

    @property
    def client(self) -> Any:
        return self._client

    async def get_many(self, keys: list[str]) -> list[bytes | str | None]:
        """Bulk read values, one per key in order.

        Values come back as stored; decoding is left to the codec so that
        undecodable bytes fall back like any other invalid value.
        """
        return list(await self._client.mget(keys))

    async def get_members(self, key: str) -> set[str]:
        """Read the members of a set."""
        members = await self._client.smembers(key)
        return {_decode(member) for member in members}

    def transaction(self) -> _RedisBatch:
        """Start a MULTI/EXEC batch."""
        return _RedisBatch(self._client.pipeline(transaction=True), atomic=True)

    def pipeline(self) -> _RedisBatch:
        """Start a non-transactional pipeline."""
        return _RedisBatch(self._client.pipeline(transaction=False), atomic=False)

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        await self._client.aclose()
