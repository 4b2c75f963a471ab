"""Comparison of a probe result against the expected values."""

from dataclasses import dataclass

from healthwatch.ports.http import ProbeResult
from healthwatch.ports.settings import SettingsPort

__all__ = ["Mismatch", "find_mismatches"]


@dataclass(frozen=True, slots=True)
class Mismatch:
    """One observed value differing from its expectation.

    Attributes:
        field: Human-readable name of the checked field.
        expected: Expected value.
        observed: Observed value.
    """

    field: str
    expected: int | str
    observed: int | str

    def __str__(self) -> str:
        return f"{self.field} mismatch, got: {self.observed!r}, expected: {self.expected!r}"


def find_mismatches(settings: SettingsPort, result: ProbeResult) -> list[Mismatch]:
    """Compare status code and tracked headers with the snapshot.

    Every check runs regardless of the others. An empty expectation matches
    only an absent or empty header.

    Args:
        settings: Snapshot holding the expectations.
        result: Observed response fields.

    Returns:
        One Mismatch per differing field, in check order.
    """
    checks: list[tuple[str, int | str, int | str]] = [
        ("Status code", settings.expected_status, result.status_code),
        ("Server header", settings.expected_server, result.server),
        ("Content-Type header", settings.expected_content_type, result.content_type),
        # Response header, not the request's own User-Agent
        ("User-Agent header", settings.expected_user_agent, result.user_agent),
    ]
    return [
        Mismatch(field=name, expected=expected, observed=observed)
        for name, expected, observed in checks
        if expected != observed
    ]
