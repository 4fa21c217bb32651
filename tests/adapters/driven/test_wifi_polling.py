"""Tests for the polling network observer."""

import asyncio

import pytest

from ssid_notifier.adapters.driven.wifi.polling import PollingNetworkObserver

__all__ = []


@pytest.mark.asyncio
async def test_polling_observer_fires_periodically() -> None:
    """The callback should fire on every interval until stopped."""
    signals: list[None] = []
    observer = PollingNetworkObserver(interval_sec=0.01)

    await observer.start(lambda: signals.append(None))
    await asyncio.sleep(0.1)
    await observer.stop()
    fired = len(signals)
    await asyncio.sleep(0.05)

    assert fired >= 2
    assert len(signals) == fired


@pytest.mark.asyncio
async def test_polling_observer_stop_without_start_is_safe() -> None:
    """stop() before start() should do nothing."""
    await PollingNetworkObserver().stop()
