"""Tests for duration string parsing."""

import pytest

from healthwatch.adapters.driven.config.duration import parse_duration

__all__ = []


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("60s", 60.0),
        ("1m30s", 90.0),
        ("250ms", 0.25),
        ("1.5h", 5400.0),
        ("2h45m", 9900.0),
        ("100us", 0.0001),
        ("0", 0.0),
        ("-30s", -30.0),
        ("+1m", 60.0),
        (" 5s ", 5.0),
    ],
)
def test_parse_duration(value: str, expected: float) -> None:
    """Valid duration strings should convert to seconds."""
    assert parse_duration(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", ["", "60", "s", "5 s", "1x", "1m30", "-", "abc"])
def test_parse_duration_rejects_malformed(value: str) -> None:
    """Malformed duration strings should raise ValueError."""
    with pytest.raises(ValueError):
        parse_duration(value)
