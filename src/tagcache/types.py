"""Core types for tagcache."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

# Anything representable in the JSON interchange format
JSONValue = Union[
    None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"]
]

# Seconds as a number, or a duration string like "500ms", "30s", "5m"
Timeout = float | int | str


@dataclass(frozen=True, slots=True)
class TagCacheOptions:
    """Configuration for a TagCache, fixed at construction."""

    default_timeout: Timeout | None = None
    redis: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze a private copy so callers can't mutate it afterwards
        object.__setattr__(self, "redis", MappingProxyType(dict(self.redis)))
