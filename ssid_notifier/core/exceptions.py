"""Error taxonomy for the SSID notifier."""

from typing import Any

from ssid_notifier.ports.delivery import FailureKind

__all__ = [
    "SsidNotifierError",
    "ConfigError",
    "ObserverRegistrationError",
    "SsidReadError",
    "SessionAlreadyRunningError",
    "DeliveryError",
]


class SsidNotifierError(Exception):
    """Base exception for all SSID notifier errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause


class ConfigError(SsidNotifierError):
    """Raised before a session starts when the endpoint URL is unusable."""


class ObserverRegistrationError(SsidNotifierError):
    """Raised when the platform refuses a network observer registration."""


class SsidReadError(SsidNotifierError):
    """Raised when the current SSID cannot be resolved."""


class SessionAlreadyRunningError(SsidNotifierError):
    """Raised when start is requested while a session is active."""


class DeliveryError(SsidNotifierError):
    """Raised by the HTTP adapter when one delivery attempt fails."""

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, details={"status_code": status_code}, cause=cause)
        self.kind = kind
        self.status_code = status_code
