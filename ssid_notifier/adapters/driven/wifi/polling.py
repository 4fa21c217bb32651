"""Fixed-interval network observer for hosts without change events."""

import asyncio
import contextlib
import logging

from ssid_notifier.ports.network import NetworkObserverPort, WifiSignalCallback

__all__ = ["PollingNetworkObserver"]

logger = logging.getLogger(__name__)


class PollingNetworkObserver(NetworkObserverPort):
    """Fires the callback every interval; the tracker drops unchanged reads."""

    def __init__(self, interval_sec: float = 10.0) -> None:
        self.interval_sec = interval_sec
        self._task: asyncio.Task[None] | None = None

    async def start(self, on_wifi_changed: WifiSignalCallback) -> None:
        logger.info(f"Polling wifi state every {self.interval_sec}s")
        self._task = asyncio.create_task(self._poll_loop(on_wifi_changed))

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _poll_loop(self, on_wifi_changed: WifiSignalCallback) -> None:
        while True:
            await asyncio.sleep(self.interval_sec)
            on_wifi_changed()
