"""JSON interchange codec for cached values."""

import json
from collections.abc import Sequence

from tagcache.types import JSONValue


def _decode(raw: bytes | str, errors: str = "strict") -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors)
    return raw


def serialize(value: JSONValue) -> str:
    """Serialize a value to JSON. Raises TypeError for unsupported types."""
    return json.dumps(value)


def deserialize(raw: bytes | str | None) -> JSONValue:
    """Deserialize a stored value. An absent entry (None) stays None."""
    if raw is None:
        return None
    return json.loads(_decode(raw))


def deserialize_all(raws: Sequence[bytes | str | None]) -> list[JSONValue]:
    """Deserialize a bulk read result.

    If any element is not valid JSON the whole result falls back to the
    raw (decoded) strings, not just the failing element.
    """
    try:
        return [deserialize(raw) for raw in raws]
    except ValueError:
        return [None if raw is None else _decode(raw, "replace") for raw in raws]
