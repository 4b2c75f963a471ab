"""Lifecycle controller: the event loop that periodically probes the target."""

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable
from enum import Enum

from healthwatch.core.checks import find_mismatches
from healthwatch.core.ticker import Ticker
from healthwatch.ports.errors import ConfigError
from healthwatch.ports.http import ProbeRequest, ProbeResult
from healthwatch.ports.settings import SettingsPort
from healthwatch.ports.signals import ControlSignal, SignalSourcePort

__all__ = ["LifecycleController", "LifecycleState", "SHUTDOWN_GRACE_SEC", "SIGNAL_EXIT_CODE"]

logger = logging.getLogger(__name__)

SHUTDOWN_GRACE_SEC = 2.0
SIGNAL_EXIT_CODE = 1

LoadFn = Callable[[], SettingsPort]
ProbeFn = Callable[[ProbeRequest], Awaitable[ProbeResult]]


class LifecycleState(Enum):
    """States of the controller."""

    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class _Event(Enum):
    CANCEL = "cancel"
    TICK = "tick"


class LifecycleController:
    """Single-threaded loop racing signals, cancellation and a ticker.

    Each iteration waits for the first ready source and handles exactly
    one event before waiting again, so probe cycles and reloads never
    interleave:

    - TERMINATE signal: grace delay, then ``SystemExit(1)``.
    - RELOAD signal: call ``load_fn`` once and swap the snapshot; a failed
      reload keeps the previous snapshot.
    - Cancellation: ``run()`` returns normally.
    - Tick: one probe cycle; a TransportError from the probe ends the loop.

    All process-wide inputs are injected, so the controller can be driven
    by an ``asyncio.Queue`` and an ``asyncio.Event`` in tests.
    """

    def __init__(
        self,
        settings: SettingsPort,
        load_fn: LoadFn,
        probe_fn: ProbeFn,
        signals: SignalSourcePort,
        cancel: asyncio.Event,
        *,
        shutdown_grace_sec: float = SHUTDOWN_GRACE_SEC,
    ) -> None:
        """Initialize controller.

        Args:
            settings: Snapshot loaded at startup.
            load_fn: Re-reads configuration; raises ConfigError on failure.
            probe_fn: Issues one GET request; raises TransportError on failure.
            signals: Source of TERMINATE/RELOAD control signals.
            cancel: Set by the embedding caller to stop the loop cleanly.
            shutdown_grace_sec: Delay between shutdown start and exit.
        """
        self._settings = settings
        self._load_fn = load_fn
        self._probe_fn = probe_fn
        self._signals = signals
        self._cancel = cancel
        self._shutdown_grace_sec = shutdown_grace_sec
        self._state = LifecycleState.RUNNING

    @property
    def state(self) -> LifecycleState:
        """Current lifecycle state."""
        return self._state

    @property
    def settings(self) -> SettingsPort:
        """Snapshot currently in effect."""
        return self._settings

    async def run(self) -> None:
        """Run until cancelled, terminated by signal, or a probe fails.

        Raises:
            SystemExit: With code 1 after a TERMINATE signal.
            TransportError: If a probe request could not complete.
        """
        logger.info(f"Starting... tick={self._settings.tick_sec}s pid={os.getpid()}")

        try:
            async with Ticker(self._settings.tick_sec) as ticker:
                while True:
                    event = await self._next_event(ticker)

                    if event is ControlSignal.TERMINATE:
                        await self._shutdown()
                    elif event is ControlSignal.RELOAD:
                        self._reload(ticker)
                    elif event is _Event.CANCEL:
                        logger.info("Cancellation requested, stopping loop.")
                        return
                    else:
                        await self._probe_cycle()
                        ticker.consume()
        finally:
            self._state = LifecycleState.TERMINATED

    async def _next_event(self, ticker: Ticker) -> ControlSignal | _Event:
        """Wait for the first ready event source.

        A dequeued signal always wins, since it can't be put back. Sources
        not handled this round stay ready for the next one.
        """
        signal_task = asyncio.ensure_future(self._signals.get())
        cancel_task = asyncio.ensure_future(self._cancel.wait())
        tick_task = asyncio.ensure_future(ticker.wait())
        waiters = (signal_task, cancel_task, tick_task)

        try:
            done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in waiters:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*waiters, return_exceptions=True)

        if signal_task in done:
            return signal_task.result()
        if cancel_task in done:
            return _Event.CANCEL
        return _Event.TICK

    async def _probe_cycle(self) -> None:
        """Probe the target once and log every mismatch."""
        settings = self._settings
        result = await self._probe_fn(
            ProbeRequest(url=settings.url, timeout_sec=settings.request_timeout_sec)
        )

        logger.info(f"{os.getpid()}: GET {settings.url} returned {result.status_code}")
        for mismatch in find_mismatches(settings, result):
            logger.warning(f"{mismatch}")

    def _reload(self, ticker: Ticker) -> None:
        logger.info("Reload requested, re-reading configuration.")
        try:
            fresh = self._load_fn()
        except ConfigError as e:
            logger.error(f"Reload failed, keeping previous configuration: {e}")
            return

        previous, self._settings = self._settings, fresh
        if fresh.tick_sec != previous.tick_sec:
            ticker.reset(fresh.tick_sec)
        logger.info(f"Configuration reloaded: url={fresh.url}, tick={fresh.tick_sec}s")

    async def _shutdown(self) -> None:
        self._state = LifecycleState.SHUTTING_DOWN
        logger.info("Terminate requested, shutting down, please wait...")
        await asyncio.sleep(self._shutdown_grace_sec)
        logger.info("Shutdown complete.")
        self._state = LifecycleState.TERMINATED
        raise SystemExit(SIGNAL_EXIT_CODE)
