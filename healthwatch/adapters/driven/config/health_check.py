"""Configuration validator for container orchestration health checks."""

import logging
import sys
from collections.abc import Sequence

from healthwatch.adapters.driven.config.settings import load_settings
from healthwatch.adapters.driven.logging.logging_config import configure_logs
from healthwatch.ports.errors import ConfigError

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Validate checker configuration without probing anything.

    Validates:
    - Arguments, environment variables and the config file parse.
    - The config file (if any) exists and holds only known options.
    - Every value has the right type (status, durations).

    Args:
        argv: Command-line arguments, defaults to ``sys.argv[1:]``.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        _ = load_settings(sys.argv[1:] if argv is None else argv)
    except ConfigError as exc:
        logger.error(f"Checker configuration check FAILED: {exc}")
        return 1

    logger.info("Checker configuration check OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
