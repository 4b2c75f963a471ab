"""OS signal subscription feeding the lifecycle controller."""

import asyncio
import logging
import signal
from types import TracebackType

from healthwatch.ports.signals import ControlSignal

__all__ = ["SignalSubscription", "SIGNAL_MAP"]

logger = logging.getLogger(__name__)

SIGNAL_MAP: dict[signal.Signals, ControlSignal] = {
    signal.SIGINT: ControlSignal.TERMINATE,
    signal.SIGTERM: ControlSignal.TERMINATE,
    signal.SIGHUP: ControlSignal.RELOAD,
}


class SignalSubscription:
    """Translate SIGINT/SIGTERM/SIGHUP into queued control signals.

    Handlers are registered on the running asyncio loop on enter and removed
    on exit. The controller consumes ``events`` one signal at a time.

    Example:
        with SignalSubscription() as signals:
            sig = await signals.events.get()
    """

    def __init__(self) -> None:
        self.events: asyncio.Queue[ControlSignal] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None

    def __enter__(self) -> "SignalSubscription":
        self._loop = asyncio.get_running_loop()
        for sig in SIGNAL_MAP:
            self._loop.add_signal_handler(sig, self._handle_signal, sig)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._loop is not None:
            for sig in SIGNAL_MAP:
                self._loop.remove_signal_handler(sig)
            self._loop = None

    def _handle_signal(self, sig: signal.Signals) -> None:
        """Queue the control signal mapped to ``sig``."""
        control = SIGNAL_MAP[sig]
        logger.info(f"Got {sig.name}, queueing {control.value}.")
        self.events.put_nowait(control)
