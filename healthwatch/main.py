"""Application entrypoint."""

import asyncio
import logging
import sys
from collections.abc import Sequence
from functools import partial

from healthwatch.adapters.driven.config.settings import load_snapshot
from healthwatch.adapters.driven.http.client import HttpClient
from healthwatch.adapters.driven.logging.logging_config import configure_logs
from healthwatch.adapters.driving.signals import SignalSubscription
from healthwatch.core.event_loop import SIGNAL_EXIT_CODE, LifecycleController
from healthwatch.ports.errors import ConfigError, TransportError

__all__ = ["main", "run"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


async def main(argv: Sequence[str] | None = None, cancel: asyncio.Event | None = None) -> int:
    """Start the health checker.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration (arguments, environment, config file).
    3. Subscribe to SIGINT/SIGTERM/SIGHUP.
    4. Run the polling loop until cancelled, terminated or a probe fails.

    A TERMINATE signal exits the process from inside the loop with code 1.

    Args:
        argv: Command-line arguments, defaults to ``sys.argv[1:]``.
        cancel: Event the embedding caller sets to stop the loop cleanly.

    Returns:
        0 after cancellation, 1 on configuration or transport errors.
    """
    configure_logs()
    logger.info("Starting health checker...")

    args = list(sys.argv[1:] if argv is None else argv)
    loader = partial(load_snapshot, args)

    try:
        snapshot = loader()
    except ConfigError as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check -status, -tick, -url, -timeout and the -config file; "
            "values starting with '-' need the -name=value form.",
            exc,
        )
        return EXIT_FAILURE

    async with HttpClient() as http:
        with SignalSubscription() as signals:
            controller = LifecycleController(
                settings=snapshot,
                load_fn=loader,
                probe_fn=http.get,
                signals=signals.events,
                cancel=cancel if cancel is not None else asyncio.Event(),
            )
            try:
                await controller.run()
            except TransportError as e:
                logger.error(f"Probe failed, stopping: {e}")
                return EXIT_FAILURE

    logger.info("Health checker stopped.")
    return EXIT_OK


def run() -> None:
    """Console script entrypoint."""
    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutdown requested by user (Ctrl+C).")
        code = SIGNAL_EXIT_CODE
    raise SystemExit(code)


if __name__ == "__main__":
    run()
