"""Configuration loading from arguments, environment variables and files."""

import argparse
import logging
import os
from collections.abc import Mapping, Sequence
from typing import Any, NoReturn

from dotenv import load_dotenv
from dotenv.parser import parse_stream
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from healthwatch.adapters.driven.config.duration import parse_duration
from healthwatch.ports.errors import ConfigError
from healthwatch.ports.settings import DEFAULT_STATUS, DEFAULT_TICK_SEC, SettingsPort

__all__ = ["Settings", "load_settings", "load_snapshot", "to_settings_port", "OPTION_NAMES"]

load_dotenv()

logger = logging.getLogger(__name__)

CONFIG_OPTION = "config"
OPTION_NAMES = ("status", "tick", "server", "content_type", "user_agent", "url", "timeout")

_OPTION_HELP = {
    "status": "Expected response HTTP status code",
    "tick": "Ticking interval (e.g. 60s, 1m30s)",
    "server": "Expected Server HTTP header value",
    "content_type": "Expected Content-Type HTTP header value",
    "user_agent": "Expected User-Agent HTTP header value",
    "url": "Request URL",
    "timeout": "Total request timeout, 0s disables it",
}


class Settings(BaseModel):
    """Validated checker configuration.

    Attributes:
        status: Expected HTTP status code.
        tick: Interval between probes in seconds (must be positive).
        server: Expected ``Server`` header value.
        content_type: Expected ``Content-Type`` header value.
        user_agent: Expected ``User-Agent`` response header value.
        url: URL to poll.
        timeout: Total request timeout in seconds, 0 for none.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: int = Field(default=DEFAULT_STATUS, description="Expected HTTP status code.")
    tick: float = Field(default=DEFAULT_TICK_SEC, gt=0, description="Polling interval in seconds.")
    server: str = Field(default="", description="Expected Server header.")
    content_type: str = Field(default="", description="Expected Content-Type header.")
    user_agent: str = Field(default="", description="Expected User-Agent response header.")
    url: str = Field(default="", description="Request URL.")
    timeout: float = Field(default=0.0, ge=0, description="Request timeout in seconds.")

    @field_validator("tick", "timeout", mode="before")
    @classmethod
    def validate_duration(cls, v: Any) -> Any:
        """Parse duration strings into seconds.

        Args:
            v: Raw value, a duration string or a number of seconds.

        Returns:
            Seconds as float, or the value unchanged for non-strings.

        Raises:
            ValueError: If the string is not a valid duration.
        """
        if isinstance(v, str):
            return parse_duration(v)
        return v


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting the process."""

    def error(self, message: str) -> NoReturn:
        raise ConfigError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="healthwatch",
        add_help=False,
        allow_abbrev=False,
        argument_default=argparse.SUPPRESS,
    )
    parser.add_argument(f"-{CONFIG_OPTION}", f"--{CONFIG_OPTION}", help="Path to config file")
    for name in OPTION_NAMES:
        parser.add_argument(f"-{name}", f"--{name}", help=_OPTION_HELP[name])
    return parser


def _read_config_file(path: str) -> dict[str, str]:
    """Read option values from a dotenv-style config file.

    Values are taken literally; ``${VAR}`` references are not expanded.

    Args:
        path: Path to the config file.

    Returns:
        Mapping of option name to raw string value.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid UTF-8,
            holds a line that does not parse, or holds an unknown key.
    """
    try:
        with open(path, encoding="utf-8") as stream:
            bindings = list(parse_stream(stream))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    values: dict[str, str] = {}
    for binding in bindings:
        if binding.error:
            raise ConfigError(
                f"Malformed line {binding.original.line} in config file {path}: "
                f"{binding.original.string.strip()!r} (expected key=value)"
            )
        if binding.key is None:
            continue
        name = binding.key.strip().lower()
        if name not in OPTION_NAMES:
            raise ConfigError(f"Unknown option {binding.key!r} in config file {path}")
        # A bare "key" line without "=" parses as None
        values[name] = binding.value if binding.value is not None else ""

    logger.debug(f"Read {len(values)} options from config file {path}")
    return values


def load_settings(
    args: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load and validate settings from layered sources.

    Precedence, lowest to highest: defaults, config file, environment
    variables, command-line arguments.

    Options (environment variable is the upper-cased name):
    - status: Expected status code (default 200).
    - tick: Polling interval as a duration string (default 60s).
    - server, content_type, user_agent: Expected header values (default "").
    - url: URL to poll (default "").
    - timeout: Request timeout as a duration string (default 0s, disabled).
    - config: Path to a dotenv-style config file.

    Args:
        args: Command-line arguments without the program name.
        environ: Environment mapping, defaults to ``os.environ``.

    Returns:
        Validated Settings object.

    Raises:
        ConfigError: If any source is malformed or a value is invalid.
    """
    env = os.environ if environ is None else environ
    cli = vars(_build_parser().parse_args(list(args or [])))

    config_path = cli.pop(CONFIG_OPTION, None) or env.get(CONFIG_OPTION.upper())

    merged: dict[str, str] = {}
    if config_path:
        merged.update(_read_config_file(config_path))
    for name in OPTION_NAMES:
        if name.upper() in env:
            merged[name] = env[name.upper()]
    merged.update(cli)

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.info(
        f"Checker configured: url={settings.url or '<empty>'}, tick={settings.tick}s, "
        f"status={settings.status}, server={settings.server!r}, "
        f"content_type={settings.content_type!r}, user_agent={settings.user_agent!r}, "
        f"timeout={settings.timeout or '<disabled>'}"
    )

    return settings


def to_settings_port(settings: Settings) -> SettingsPort:
    """Convert validated settings into the core's snapshot DTO.

    Args:
        settings: Validated settings.

    Returns:
        Immutable snapshot for the core loop.
    """
    return SettingsPort(
        url=settings.url,
        expected_status=settings.status,
        expected_server=settings.server,
        expected_content_type=settings.content_type,
        expected_user_agent=settings.user_agent,
        tick_sec=settings.tick,
        request_timeout_sec=settings.timeout or None,
    )


def load_snapshot(
    args: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> SettingsPort:
    """Load settings and return them as a core snapshot.

    Args:
        args: Command-line arguments without the program name.
        environ: Environment mapping, defaults to ``os.environ``.

    Returns:
        Immutable snapshot for the core loop.

    Raises:
        ConfigError: If configuration is invalid.
    """
    return to_settings_port(load_settings(args, environ))
