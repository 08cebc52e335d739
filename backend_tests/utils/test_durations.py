"""Tests for duration parsing."""

from datetime import timedelta

import pytest

from storyswap.utils.durations import duration_to_seconds, parse_duration

@pytest.mark.parametrize("value,expected", [
    ("15m", timedelta(minutes=15)),
    ("30d", timedelta(days=30)),
    ("24h", timedelta(hours=24)),
    ("1h", timedelta(hours=1)),
    ("45s", timedelta(seconds=45)),
    ("2w", timedelta(weeks=2)),
    ("2 weeks", timedelta(weeks=2)),
    ("10 Minutes", timedelta(minutes=10)),
    ("900", timedelta(seconds=900)),
    (900, timedelta(seconds=900)),
    (0, timedelta(0)),
    (timedelta(hours=3), timedelta(hours=3)),
])
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected

@pytest.mark.parametrize("value", ["", "m15", "15 fortnights", "1.5h", "-5m", -1, True, None, [15]])
def test_parse_duration_rejects(value):
    with pytest.raises(ValueError):
        parse_duration(value)

def test_duration_to_seconds():
    assert duration_to_seconds(timedelta(minutes=15)) == 900
    assert duration_to_seconds(timedelta(days=30)) == 2592000
