"""Error taxonomy shared by core and adapters."""

__all__ = ["ConfigError", "TransportError"]


class ConfigError(ValueError):
    """A configuration value could not be parsed or validated."""


class TransportError(ConnectionError):
    """The probe request could not be completed (refused, DNS, timeout...)."""
