"""Tests for the response comparison."""

import dataclasses

import pytest

from healthwatch.core.checks import Mismatch, find_mismatches
from healthwatch.ports.http import ProbeResult
from healthwatch.ports.settings import SettingsPort

__all__ = []

RESULT = ProbeResult(status_code=200, server="nginx", content_type="text/html", user_agent="")


def test_no_mismatch_when_everything_matches() -> None:
    """Equal status and headers should produce no mismatch."""
    settings = SettingsPort(
        url="http://test",
        expected_status=200,
        expected_server="nginx",
        expected_content_type="text/html",
        expected_user_agent="",
    )

    assert find_mismatches(settings, RESULT) == []


def test_independent_mismatches_are_all_reported() -> None:
    """Each differing field should be reported, none short-circuits another."""
    settings = SettingsPort(
        url="http://test",
        expected_status=404,
        expected_server="apache",
        expected_content_type="text/html",
        expected_user_agent="x",
    )

    mismatches = find_mismatches(settings, RESULT)

    assert mismatches == [
        Mismatch(field="Status code", expected=404, observed=200),
        Mismatch(field="Server header", expected="apache", observed="nginx"),
        Mismatch(field="User-Agent header", expected="x", observed=""),
    ]


def test_empty_expectation_flags_present_header() -> None:
    """An empty expectation should mismatch a header that is present."""
    settings = SettingsPort(url="http://test", expected_content_type="text/html")
    result = ProbeResult(status_code=200, server="gunicorn", content_type="text/html")

    mismatches = find_mismatches(settings, result)

    assert [m.field for m in mismatches] == ["Server header"]


def test_user_agent_is_read_from_response() -> None:
    """The User-Agent check should compare the response header value."""
    settings = SettingsPort(url="http://test", expected_user_agent="probe-bot")
    result = ProbeResult(status_code=200, user_agent="probe-bot")

    assert find_mismatches(settings, result) == []


def test_mismatch_renders_observed_and_expected() -> None:
    """Mismatch string should name the field and both values."""
    mismatch = Mismatch(field="Status code", expected=200, observed=502)

    assert str(mismatch) == "Status code mismatch, got: 502, expected: 200"


def test_snapshot_is_immutable() -> None:
    """Snapshots should reject in-place field updates."""
    settings = SettingsPort(url="http://test")

    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.url = "http://other"  # type: ignore[misc]
