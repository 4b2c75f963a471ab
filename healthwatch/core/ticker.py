"""Repeating timer owned by the event loop."""

import asyncio
from types import TracebackType

__all__ = ["Ticker"]


class Ticker:
    """Single repeating timer backed by one ``loop.call_later`` handle.

    The ticker fires once per interval and then stays fired until the tick
    is consumed; consuming it arms the next interval. Ticks therefore never
    pile up behind a slow consumer.

    Use as an async context manager so the pending timer is always released.
    """

    def __init__(self, interval_sec: float) -> None:
        """Initialize ticker.

        Args:
            interval_sec: Seconds between ticks.
        """
        self._interval_sec = interval_sec
        self._fired = asyncio.Event()
        self._handle: asyncio.TimerHandle | None = None

    @property
    def interval_sec(self) -> float:
        """Current interval in seconds."""
        return self._interval_sec

    @property
    def armed(self) -> bool:
        """True while a timer is pending."""
        return self._handle is not None and not self._handle.cancelled()

    async def __aenter__(self) -> "Ticker":
        self._arm()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def _arm(self) -> None:
        self._fired.clear()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._interval_sec, self._fire)

    def _fire(self) -> None:
        self._handle = None
        self._fired.set()

    async def wait(self) -> None:
        """Block until the current interval has elapsed."""
        await self._fired.wait()

    def consume(self) -> None:
        """Acknowledge the fired tick and arm the next interval."""
        self.stop()
        self._arm()

    def reset(self, interval_sec: float) -> None:
        """Restart the timer with a new interval.

        Args:
            interval_sec: New seconds between ticks.
        """
        self._interval_sec = interval_sec
        self.stop()
        self._arm()

    def stop(self) -> None:
        """Cancel the pending timer, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
