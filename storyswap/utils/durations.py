"""Duration parsing utilities.

Token lifetimes are configured the way deployments usually write them:
``900``, ``"15m"``, ``"24h"``, ``"30d"`` or ``"2 weeks"``.
"""

import re
from datetime import timedelta
from typing import Union

_DURATION_PATTERN = re.compile(r"^\s*(?P<amount>\d+)\s*(?P<unit>[a-zA-Z]*)\s*$")

_UNIT_SECONDS = {
    "": 1,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
}


def parse_duration(value: Union[str, int, float, timedelta]) -> timedelta:
    """Parse a duration value into a timedelta.

    Args:
        value: Seconds as a number, a ``<amount><unit>`` string or a timedelta

    Returns:
        timedelta: Parsed, non-negative duration

    Raises:
        ValueError: If the value is negative or cannot be parsed
    """
    if isinstance(value, timedelta):
        duration = value
    elif isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    elif isinstance(value, (int, float)):
        duration = timedelta(seconds=value)
    elif isinstance(value, str):
        match = _DURATION_PATTERN.match(value)
        if not match:
            raise ValueError(f"Invalid duration: {value!r}")
        unit = match.group("unit").lower()
        if unit not in _UNIT_SECONDS:
            raise ValueError(f"Unknown duration unit {unit!r} in {value!r}")
        duration = timedelta(seconds=int(match.group("amount")) * _UNIT_SECONDS[unit])
    else:
        raise ValueError(f"Invalid duration: {value!r}")

    if duration < timedelta(0):
        raise ValueError(f"Duration must not be negative: {value!r}")
    return duration


def duration_to_seconds(duration: timedelta) -> int:
    """Whole seconds in a duration."""
    return int(duration.total_seconds())
