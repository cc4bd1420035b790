"""In-memory storage adapter (async only)."""

from __future__ import annotations

import asyncio
import heapq
import math
import time

from tagcache.errors import BatchRejectedError, TagCacheError

# (op, key, arg, ttl)
_Command = tuple[str, str, str | None, float | None]

_STRING = "string"
_SET = "set"


def _wrongtype(key: str) -> str:
    return f"WRONGTYPE Operation against a key holding the wrong kind of value: {key!r}"


class _MemoryBatch:
    """Queued commands against an AsyncMemoryAdapter."""

    def __init__(self, adapter: AsyncMemoryAdapter, *, atomic: bool) -> None:
        self._adapter = adapter
        self._atomic = atomic
        self._commands: list[_Command] = []

    def add_member(self, key: str, member: str) -> None:
        self._commands.append(("sadd", key, member, None))

    def set_value(self, key: str, value: str, ttl: float | None = None) -> None:
        self._commands.append(("set", key, value, ttl))

    def delete(self, key: str) -> None:
        self._commands.append(("del", key, None, None))

    async def execute(self) -> None:
        commands, self._commands = self._commands, []
        await self._adapter._execute(commands, atomic=self._atomic)


class AsyncMemoryAdapter:
    """Async in-memory storage adapter with per-value expiry."""

    def __init__(self) -> None:
        self._values: dict[str, tuple[str, float | None]] = {}
        self._sets: dict[str, set[str]] = {}
        # (expires_at, key); stale heap items are skipped on eviction
        self._expiries: list[tuple[float, str]] = []
        self._lock = asyncio.Lock()

    def _live_value(self, key: str, now: float) -> str | None:
        stored = self._values.get(key)
        if stored is None:
            return None
        value, expires_at = stored
        if expires_at is not None and now >= expires_at:
            del self._values[key]  # lazy expiry
            return None
        return value

    def _kind(self, key: str, now: float) -> str | None:
        if self._live_value(key, now) is not None:
            return _STRING
        if key in self._sets:
            return _SET
        return None

    def _evict_expired(self, now: float) -> None:
        while self._expiries and self._expiries[0][0] <= now:
            expires_at, key = heapq.heappop(self._expiries)
            stored = self._values.get(key)
            if stored is not None and stored[1] == expires_at:
                del self._values[key]

    def _check(self, commands: list[_Command], now: float) -> None:
        """Raise BatchRejectedError if any command would fail, changing nothing."""
        kinds: dict[str, str | None] = {}
        for op, key, _, ttl in commands:
            kind = kinds[key] if key in kinds else self._kind(key, now)
            if op == "sadd":
                if kind == _STRING:
                    raise BatchRejectedError(_wrongtype(key))
                kinds[key] = _SET
            elif op == "set":
                if ttl is not None and not 0 < ttl < math.inf:
                    raise BatchRejectedError(
                        f"invalid expire time for {key!r}: {ttl!r}"
                    )
                kinds[key] = _STRING
            elif op == "del":
                kinds[key] = None
            else:
                raise BatchRejectedError(f"unknown command {op!r}")

    def _apply(self, command: _Command, now: float) -> None:
        op, key, arg, ttl = command
        if op == "sadd":
            self._values.pop(key, None)  # only an expired value can be left here
            self._sets.setdefault(key, set()).add(arg)  # type: ignore[arg-type]
        elif op == "set":
            self._sets.pop(key, None)
            expires_at = now + ttl if ttl is not None else None
            self._values[key] = (arg, expires_at)  # type: ignore[assignment]
            if expires_at is not None:
                heapq.heappush(self._expiries, (expires_at, key))
        else:
            self._values.pop(key, None)
            self._sets.pop(key, None)

    async def get_many(self, keys: list[str]) -> list[str | None]:
        """Bulk read values, one per key in order."""
        now = time.monotonic()
        async with self._lock:
            return [self._live_value(key, now) for key in keys]

    async def get_members(self, key: str) -> set[str]:
        """Read the members of a set."""
        async with self._lock:
            if self._live_value(key, time.monotonic()) is not None:
                raise TagCacheError(_wrongtype(key))
            return set(self._sets.get(key, ()))

    def transaction(self) -> _MemoryBatch:
        """Start an atomic batch."""
        return _MemoryBatch(self, atomic=True)

    def pipeline(self) -> _MemoryBatch:
        """Start a non-transactional batch."""
        return _MemoryBatch(self, atomic=False)

    async def _execute(self, commands: list[_Command], *, atomic: bool) -> None:
        now = time.monotonic()
        async with self._lock:
            self._evict_expired(now)
            if atomic:
                self._check(commands, now)
                for command in commands:
                    self._apply(command, now)
                return
            # Pipelined commands stand alone; earlier ones stay applied
            for command in commands:
                self._check([command], now)
                self._apply(command, now)

    async def disconnect(self) -> None:
        """Disconnect from the storage backend (no-op for memory)."""
        pass
