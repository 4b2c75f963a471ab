"""Settings port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["SettingsPort", "DEFAULT_TICK_SEC", "DEFAULT_STATUS"]

DEFAULT_TICK_SEC = 60.0
DEFAULT_STATUS = 200


@dataclass(frozen=True, slots=True)
class SettingsPort:
    """Immutable configuration snapshot consumed by the core loop.

    A reload builds a new instance and swaps it in whole; fields are never
    updated one by one.

    Attributes:
        url: Target URL polled on every tick (empty is legal but always fails).
        expected_status: Expected HTTP status code.
        expected_server: Expected ``Server`` response header ("" = absent).
        expected_content_type: Expected ``Content-Type`` response header.
        expected_user_agent: Expected ``User-Agent`` *response* header.
        tick_sec: Seconds between probes (positive).
        request_timeout_sec: Total request timeout, None for no timeout.
    """

    url: str = ""
    expected_status: int = DEFAULT_STATUS
    expected_server: str = ""
    expected_content_type: str = ""
    expected_user_agent: str = ""
    tick_sec: float = DEFAULT_TICK_SEC
    request_timeout_sec: float | None = None
