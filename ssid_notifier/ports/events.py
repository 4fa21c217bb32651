"""SSID event definitions (DTOs)."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar

__all__ = ["EventKind", "StartupEvent", "ChangeEvent", "ShutdownEvent", "SsidEvent"]


class EventKind(str, Enum):
    """Kind of SSID event, used in logs and operator notifications."""

    STARTED = "monitoring_started"
    CHANGED = "ssid_changed"
    STOPPED = "monitoring_stopped"


@dataclass(slots=True, frozen=True)
class StartupEvent:
    """Emitted once when a monitoring session starts.

    Attributes:
        timestamp: UTC time the session started.
        current_ssid: SSID at startup, None when not connected.
    """

    kind: ClassVar[EventKind] = EventKind.STARTED

    timestamp: datetime
    current_ssid: str | None = None


@dataclass(slots=True, frozen=True)
class ChangeEvent:
    """Emitted when the connected SSID differs from the last accepted one.

    Attributes:
        timestamp: UTC time the change was detected.
        previous_ssid: Last accepted SSID, None for the first observation.
        new_ssid: SSID the device is now connected to.
    """

    kind: ClassVar[EventKind] = EventKind.CHANGED

    timestamp: datetime
    previous_ssid: str | None
    new_ssid: str


@dataclass(slots=True, frozen=True)
class ShutdownEvent:
    """Emitted once when a monitoring session stops.

    Attributes:
        timestamp: UTC time the session stopped.
        current_ssid: Last known SSID, None if none was ever seen.
    """

    kind: ClassVar[EventKind] = EventKind.STOPPED

    timestamp: datetime
    current_ssid: str | None = None


SsidEvent = StartupEvent | ChangeEvent | ShutdownEvent
