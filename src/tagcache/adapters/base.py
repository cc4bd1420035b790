"""Base adapter protocols for storage backends."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AsyncBatch(Protocol):
    """A batch of write commands sent to the backend in one round trip.

    Queueing methods only record the command; nothing reaches the backend
    until execute() is awaited.
    """

    def add_member(self, key: str, member: str) -> None:
        """Queue adding a member to the set stored at key."""
        ...

    def set_value(self, key: str, value: str, ttl: float | None = None) -> None:
        """Queue writing a value, expiring after ttl seconds if given."""
        ...

    def delete(self, key: str) -> None:
        """Queue deleting a key. Deleting a missing key is a no-op."""
        ...

    async def execute(self) -> None:
        """Send all queued commands."""
        ...


@runtime_checkable
class AsyncStorageAdapter(Protocol):
    """Async storage adapter interface."""

    async def get_many(self, keys: list[str]) -> list[bytes | str | None]:
        """Bulk read raw values, one per key in order. Absent keys are None."""
        ...

    async def get_members(self, key: str) -> set[str]:
        """Read the full membership of the set stored at key."""
        ...

    def transaction(self) -> AsyncBatch:
        """Start an atomic batch: every command applies, or none does."""
        ...

    def pipeline(self) -> AsyncBatch:
        """Start a non-transactional batch of independent commands."""
        ...

    async def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        ...
