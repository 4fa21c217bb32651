"""Previous-SSID tracking and change detection."""

import logging
from collections.abc import Callable
from datetime import datetime

from ssid_notifier.core.exceptions import SsidReadError
from ssid_notifier.core.payload import utc_now
from ssid_notifier.ports.events import ChangeEvent
from ssid_notifier.ports.network import SsidReaderPort

__all__ = ["SsidTracker", "normalize_ssid"]

logger = logging.getLogger(__name__)

# Placeholder some platforms report when the SSID is hidden from the caller
UNKNOWN_SSID = "<unknown ssid>"


def normalize_ssid(raw: str | None) -> str | None:
    """Strip platform quoting and map placeholders to None.

    Whitespace is part of an SSID and is kept as reported.

    Args:
        raw: SSID as reported by the reader.

    Returns:
        Clean SSID, or None if there is no usable identifier.
    """
    if raw is None:
        return None
    ssid = raw
    if len(ssid) >= 2 and ssid.startswith('"') and ssid.endswith('"'):
        ssid = ssid[1:-1]
    if not ssid.strip() or ssid == UNKNOWN_SSID:
        return None
    return ssid


class SsidTracker:
    """Owns the previous-SSID state of a monitoring session.

    Only this class mutates previous_ssid. Callers must not invoke
    check_for_change() concurrently; the lifecycle guarantees this by
    feeding it from a single worker.
    """

    def __init__(
        self,
        reader: SsidReaderPort,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._reader = reader
        self._clock = clock
        self._previous_ssid: str | None = None

    @property
    def previous_ssid(self) -> str | None:
        """Last accepted SSID of the session."""
        return self._previous_ssid

    def reset(self, initial_ssid: str | None = None) -> None:
        """Start tracking from a known value (None at session boundaries)."""
        self._previous_ssid = initial_ssid

    async def current_ssid(self) -> str | None:
        """Read the SSID of the associated network.

        Not connected, unresolvable and missing permission all yield None.
        """
        try:
            raw = await self._reader.read_ssid()
        except SsidReadError as e:
            logger.debug(f"SSID unavailable: {e}")
            return None
        return normalize_ssid(raw)

    async def check_for_change(self) -> ChangeEvent | None:
        """Return a ChangeEvent if the SSID moved to a different named network.

        A drop to "no SSID" is never reported and leaves previous_ssid as is.
        """
        current = await self.current_ssid()
        if current is None or current == self._previous_ssid:
            return None

        event = ChangeEvent(
            timestamp=self._clock(),
            previous_ssid=self._previous_ssid,
            new_ssid=current,
        )
        logger.info(f"SSID changed from {self._previous_ssid} to {current}")
        self._previous_ssid = current
        return event
