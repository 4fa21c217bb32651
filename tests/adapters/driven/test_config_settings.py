"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from ssid_notifier.adapters.driven.config.settings import Settings, load_settings

__all__ = []

ENV_VARS = (
    "SSID_ENDPOINT_URL",
    "HEALTH_CHECK_ENDPOINT",
    "HTTP_CONNECT_TIMEOUT",
    "HTTP_READ_TIMEOUT",
    "NETWORK_OBSERVER",
    "POLL_INTERVAL_SECONDS",
    "WIFI_INTERFACE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    """Isolate tests from the developer's environment and .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_settings_defaults() -> None:
    """Settings should default to 5s timeouts and the nmcli observer."""
    settings = Settings(endpoint_url="http://localhost:3000/log")

    assert settings.connect_timeout_sec == 5.0
    assert settings.read_timeout_sec == 5.0
    assert settings.observer == "nmcli"
    assert settings.http_health_endpoint is None


@pytest.mark.parametrize("url", ["http://localhost:3000/log", "https://example.com/ssid"])
def test_settings_accepts_http_and_https(url: str) -> None:
    """Both http:// and https:// endpoints should be accepted."""
    assert Settings(endpoint_url=url).endpoint_url == url


@pytest.mark.parametrize("url", ["", "ftp://example.com/log", "localhost:3000/log"])
def test_settings_rejects_invalid_endpoint(url: str) -> None:
    """Settings should reject anything that isn't an absolute HTTP(S) URL."""
    with pytest.raises(ValidationError, match="Invalid HTTP endpoint"):
        Settings(endpoint_url=url)


def test_settings_rejects_invalid_health_endpoint() -> None:
    """An invalid health endpoint should be rejected."""
    with pytest.raises(ValidationError, match="Invalid health endpoint"):
        Settings(endpoint_url="http://localhost/log", http_health_endpoint="nope")


def test_settings_rejects_non_positive_timeout() -> None:
    """Timeouts must be positive."""
    with pytest.raises(ValidationError):
        Settings(endpoint_url="http://localhost/log", connect_timeout_sec=0)


def test_settings_rejects_unknown_observer() -> None:
    """Only known observer backends are allowed."""
    with pytest.raises(ValidationError):
        Settings(endpoint_url="http://localhost/log", observer="android")


def test_settings_load_settings_success(monkeypatch) -> None:
    """Load Settings should create Settings object when the input is valid."""
    monkeypatch.setenv("SSID_ENDPOINT_URL", "http://example.com/log")
    monkeypatch.setenv("HTTP_READ_TIMEOUT", "2.5")
    monkeypatch.setenv("NETWORK_OBSERVER", "poll")
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "30")
    monkeypatch.setenv("WIFI_INTERFACE", "wlan0")

    settings = load_settings()

    assert isinstance(settings, Settings)
    assert settings.read_timeout_sec == 2.5
    assert settings.connect_timeout_sec == 5.0
    assert settings.observer == "poll"
    assert settings.poll_interval_sec == 30
    assert settings.wifi_interface == "wlan0"


def test_settings_load_settings_missing_endpoint() -> None:
    """Load Settings should raise RuntimeError when the endpoint is not set."""
    with pytest.raises(RuntimeError, match="SSID_ENDPOINT_URL"):
        load_settings()


def test_settings_load_settings_failure(monkeypatch) -> None:
    """Load Settings should raise ValueError when at least one input is invalid."""
    monkeypatch.setenv("SSID_ENDPOINT_URL", "http://example.com/log")
    monkeypatch.setenv("HTTP_CONNECT_TIMEOUT", "-1")

    with pytest.raises(ValueError):
        load_settings()
