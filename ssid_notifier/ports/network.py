"""Network observation ports (interfaces)."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

__all__ = ["NetworkObserverPort", "SsidReaderPort", "WifiSignalCallback"]

WifiSignalCallback = Callable[[], None]


class NetworkObserverPort(Protocol):
    """Source of "something about the wifi network changed" signals.

    The callback carries no payload and may fire several times for a single
    logical change; consumers must deduplicate.
    """

    async def start(self, on_wifi_changed: WifiSignalCallback, /) -> None:
        """Register interest in wifi availability and capability changes.

        Args:
            on_wifi_changed: Called on every notification.

        Raises:
            ObserverRegistrationError: If the platform refuses registration.
        """
        ...

    async def stop(self) -> None:
        """Deregister. Safe to call when not started."""
        ...


class SsidReaderPort(Protocol):
    """Reads the identifier of the currently associated wifi network."""

    async def read_ssid(self) -> str | None:
        """Return the raw SSID, or None when not connected.

        Raises:
            SsidReadError: If the SSID cannot be resolved.
        """
        ...
