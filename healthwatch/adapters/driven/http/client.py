"""HTTP client adapter that issues the probe GET requests."""

import asyncio
import logging
from types import TracebackType

import aiohttp
from aiohttp import ClientTimeout, hdrs

from healthwatch.ports.errors import TransportError
from healthwatch.ports.http import ProbeRequest, ProbeResult

__all__ = ["HttpClient"]

logger = logging.getLogger(__name__)


class HttpClient:
    """HTTP prober built on a single aiohttp session.

    Features:
    - Context manager for proper resource cleanup.
    - Transport failures surfaced as TransportError, never retried.
    - Only status and the tracked response headers are read; the body is
      discarded.
    """

    def __init__(self) -> None:
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    async def get(self, req: ProbeRequest) -> ProbeResult:
        """Issue one GET request and capture the tracked response fields.

        Any HTTP status counts as a completed request. Redirects are followed.

        Args:
            req: Probe request with URL and optional timeout.

        Returns:
            Status code plus Server, Content-Type and User-Agent response headers.

        Raises:
            RuntimeError: If session not initialized.
            TransportError: If the request could not complete (connection
                refused, DNS failure, invalid URL, timeout).
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        # total=None disables aiohttp's default 5 minute limit as well
        client_timeout = ClientTimeout(total=req.timeout_sec)
        try:
            async with self.session.get(
                req.url, timeout=client_timeout, allow_redirects=True
            ) as resp:
                result = ProbeResult(
                    status_code=resp.status,
                    server=resp.headers.get(hdrs.SERVER, ""),
                    content_type=resp.headers.get(hdrs.CONTENT_TYPE, ""),
                    user_agent=resp.headers.get(hdrs.USER_AGENT, ""),
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"GET {req.url!r} failed: {e!r}") from e

        logger.debug(f"GET {req.url} returned status {result.status_code}")
        return result
