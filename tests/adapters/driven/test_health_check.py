"""Tests for health check validator."""
from pathlib import Path
from unittest.mock import patch

import pytest

from ssid_notifier.adapters.driven.config.health_check import host_problems, main
from ssid_notifier.adapters.driven.config.settings import Settings

__all__ = []

MODULE = "ssid_notifier.adapters.driven.config.health_check"
ENDPOINT = "http://localhost:8080/log"


def test_health_check_success() -> None:
    """Health check should return 0 when configuration loads and nmcli exists."""
    with (
        patch(f"{MODULE}.configure_logs"),
        patch(f"{MODULE}.load_settings", return_value=Settings(endpoint_url=ENDPOINT)),
        patch(f"{MODULE}.shutil.which", return_value="/usr/bin/nmcli"),
    ):
        result = main()

    assert result == 0


def test_health_check_failure_on_config_error() -> None:
    """Health check should return 1 when configuration fails to load."""
    with (
        patch(f"{MODULE}.configure_logs"),
        patch(f"{MODULE}.load_settings") as mock_load,
    ):
        mock_load.side_effect = RuntimeError("Missing required environment variable")
        result = main()

    assert result == 1


@pytest.mark.parametrize("observer", ["nmcli", "poll"])
def test_health_check_fails_without_nmcli(observer: str) -> None:
    """Every observer reads SSIDs through nmcli, so a missing binary is fatal."""
    settings = Settings(endpoint_url=ENDPOINT, observer=observer)

    with (
        patch(f"{MODULE}.configure_logs"),
        patch(f"{MODULE}.load_settings", return_value=settings),
        patch(f"{MODULE}.shutil.which", return_value=None),
    ):
        result = main()

    assert result == 1


def test_host_problems_reports_missing_interface(tmp_path: Path) -> None:
    """A configured interface absent from the host should be reported."""
    (tmp_path / "wlan0").mkdir()
    present = Settings(endpoint_url=ENDPOINT, wifi_interface="wlan0")
    missing = Settings(endpoint_url=ENDPOINT, wifi_interface="wlp9s0")

    with patch(f"{MODULE}.shutil.which", return_value="/usr/bin/nmcli"):
        assert host_problems(present, sys_net=tmp_path) == []
        assert host_problems(missing, sys_net=tmp_path) == ["Wifi interface 'wlp9s0' does not exist"]


def test_host_problems_ignores_unset_interface(tmp_path: Path) -> None:
    """Without WIFI_INTERFACE any wifi device is acceptable."""
    with patch(f"{MODULE}.shutil.which", return_value="/usr/bin/nmcli"):
        assert host_problems(Settings(endpoint_url=ENDPOINT), sys_net=tmp_path) == []
