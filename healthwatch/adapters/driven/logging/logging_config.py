"""Structured logging setup for the checker."""

import logging
import sys
from typing import TextIO

__all__ = ["configure_logs"]


def configure_logs(stream: TextIO | None = None) -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level, writing to ``stream`` (stdout by default).
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (healthwatch) at DEBUG level.
    - Structured format with timestamp, level, module, and line number.

    Args:
        stream: Destination of the log stream.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
    date_format = "%d/%m/%y %H:%M:%S"

    formatter = logging.Formatter(log_format, date_format)
    handler = logging.StreamHandler(sys.stdout if stream is None else stream)
    handler.setFormatter(formatter)

    # Root logger
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)

    # Suppress verbose framework loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    # Application loggers
    logging.getLogger("healthwatch").setLevel(logging.DEBUG)
