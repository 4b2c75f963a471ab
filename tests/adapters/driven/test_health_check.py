"""Tests for the configuration health check."""
from unittest.mock import patch

from healthwatch.adapters.driven.config.health_check import main
from healthwatch.ports.errors import ConfigError

__all__ = []


def test_health_check_success() -> None:
    """Health check should return 0 when configuration loads successfully."""
    with (
        patch("healthwatch.adapters.driven.config.health_check.configure_logs"),
        patch("healthwatch.adapters.driven.config.health_check.load_settings") as mock_load,
    ):
        mock_load.return_value = None
        result = main(["-url", "http://example.com"])

    assert result == 0
    mock_load.assert_called_once_with(["-url", "http://example.com"])


def test_health_check_failure_on_config_error() -> None:
    """Health check should return 1 when configuration fails to load."""
    with (
        patch("healthwatch.adapters.driven.config.health_check.configure_logs"),
        patch("healthwatch.adapters.driven.config.health_check.load_settings") as mock_load,
    ):
        mock_load.side_effect = ConfigError("Invalid configuration")
        result = main([])

    assert result == 1


def test_health_check_rejects_malformed_status() -> None:
    """A non-numeric status should fail the real loader."""
    with patch("healthwatch.adapters.driven.config.health_check.configure_logs"):
        assert main(["-status", "abc"]) == 1
