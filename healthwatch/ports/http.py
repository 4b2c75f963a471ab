"""HTTP probe port definition (DTOs)."""

from dataclasses import dataclass

__all__ = ["ProbeRequest", "ProbeResult"]


@dataclass(frozen=True, slots=True)
class ProbeRequest:
    """One GET request to be issued by the prober.

    Attributes:
        url: Target URL.
        timeout_sec: Total request timeout in seconds, None to wait forever.
    """

    url: str
    timeout_sec: float | None = None


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """The parts of a response the checker compares.

    Missing headers are reported as empty strings.
    """

    status_code: int
    server: str = ""
    content_type: str = ""
    user_agent: str = ""
