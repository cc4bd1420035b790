"""Timeout parsing utilities."""

import math
import re

from tagcache.types import Timeout

_DURATION_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)(ms|s|m|h|d)$")
_UNITS: dict[str, float] = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 3_600,
    "d": 86_400,
}


def parse_timeout(timeout: Timeout) -> float:
    """Parse a timeout to seconds. Numbers are already seconds."""
    if isinstance(timeout, bool):
        raise ValueError(f"Invalid duration: {timeout!r}")
    if isinstance(timeout, (int, float)):
        try:
            seconds = float(timeout)
        except OverflowError:
            seconds = math.inf
        if not math.isfinite(seconds):
            raise ValueError(f"Invalid duration: {timeout!r}")
        return seconds

    match = _DURATION_PATTERN.match(timeout)
    if not match:
        raise ValueError(f"Invalid duration: {timeout!r}")

    value, unit = match.groups()
    seconds = float(value) * _UNITS[unit]
    if not math.isfinite(seconds):
        raise ValueError(f"Invalid duration: {timeout!r}")
    return seconds
