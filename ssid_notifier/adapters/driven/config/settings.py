"""Configuration loading from environment variables."""

import logging
import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

__all__ = ["Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)


def _validate_http_url(v: str, label: str) -> str:
    try:
        url = _http_url_adapter.validate_python(v)
        if url.scheme not in ("http", "https"):
            raise ValueError("Only http:// and https:// endpoints allowed")
    except Exception as e:
        raise ValueError(f"Invalid {label}: {e}") from e
    return v


class Settings(BaseModel):
    """Runtime configuration for the notifier service.

    Attributes:
        endpoint_url: HTTP endpoint that will receive SSID events.
        http_health_endpoint: Optional endpoint to probe before starting.
        connect_timeout_sec: Seconds allowed to connect to the endpoint.
        read_timeout_sec: Seconds allowed to read the endpoint's response.
        observer: Source of wifi change signals.
        poll_interval_sec: Period of the polling observer.
        wifi_interface: Wireless interface to read the SSID from.
    """

    endpoint_url: str = Field(..., description="HTTP endpoint that will receive events.")
    http_health_endpoint: str | None = Field(
        default=None,
        description=(
            "Optional HTTP endpoint to probe for health. "
            "If not set, no health check is performed."
        ),
    )
    connect_timeout_sec: float = Field(default=5.0, gt=0)
    read_timeout_sec: float = Field(default=5.0, gt=0)
    observer: Literal["nmcli", "poll"] = Field(
        default="nmcli",
        description="'nmcli' follows NetworkManager events, 'poll' re-checks periodically.",
    )
    poll_interval_sec: float = Field(default=10.0, gt=0)
    wifi_interface: str | None = None

    @field_validator("endpoint_url")
    @classmethod
    def validate_endpoint_url(cls, v: str) -> str:
        """Validate that endpoint is a valid HTTP(S) URL.

        Args:
            v: Endpoint URL to validate.

        Returns:
            The validated URL.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        return _validate_http_url(v, "HTTP endpoint")

    @field_validator("http_health_endpoint")
    @classmethod
    def validate_http_health_endpoint(cls, v: str | None) -> str | None:
        """Validate that health endpoint (if provided) is a valid HTTP(S) URL.

        Args:
            v: Health endpoint URL to validate (can be None).

        Returns:
            The validated URL or None.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        if v is None:
            return v
        return _validate_http_url(v, "health endpoint")


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    Required environment variables:
    - SSID_ENDPOINT_URL: Valid HTTP(S) URL receiving events.

    Optional:
    - HEALTH_CHECK_ENDPOINT: URL to probe before starting.
    - HTTP_CONNECT_TIMEOUT / HTTP_READ_TIMEOUT: Seconds (default 5).
    - NETWORK_OBSERVER: 'nmcli' (default) or 'poll'.
    - POLL_INTERVAL_SECONDS: Polling period (default 10).
    - WIFI_INTERFACE: Wireless interface name.

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If required env vars are missing.
        ValueError: If configuration is invalid.
    """
    try:
        endpoint_url = os.environ["SSID_ENDPOINT_URL"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    optional = {
        "http_health_endpoint": os.getenv("HEALTH_CHECK_ENDPOINT"),
        "connect_timeout_sec": os.getenv("HTTP_CONNECT_TIMEOUT"),
        "read_timeout_sec": os.getenv("HTTP_READ_TIMEOUT"),
        "observer": os.getenv("NETWORK_OBSERVER"),
        "poll_interval_sec": os.getenv("POLL_INTERVAL_SECONDS"),
        "wifi_interface": os.getenv("WIFI_INTERFACE"),
    }

    settings = Settings(
        endpoint_url=endpoint_url,
        **{key: value for key, value in optional.items() if value},
    )

    logger.info(
        f"Notifier configured: endpoint={settings.endpoint_url}, "
        f"observer={settings.observer}, "
        f"timeouts={settings.connect_timeout_sec}s/{settings.read_timeout_sec}s, "
        f"health_check={settings.http_health_endpoint or '<disabled>'}"
    )

    return settings
