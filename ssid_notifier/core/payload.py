"""JSON payload serialization for SSID events."""

from datetime import datetime, timezone
from typing import Any

from ssid_notifier.ports.events import ChangeEvent, ShutdownEvent, SsidEvent, StartupEvent

__all__ = ["format_timestamp", "to_payload", "utc_now", "NO_SSID"]

NO_SSID = "none"
STARTED_MESSAGE = "SSID monitoring service started"
STOPPED_MESSAGE = "SSID monitoring service stopped"


def utc_now() -> datetime:
    """Return the current aware UTC time."""
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with second precision.

    Naive datetimes are assumed to already be in UTC.

    Args:
        moment: Time to format.

    Returns:
        String such as ``2024-05-01T12:30:00Z``.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def to_payload(event: SsidEvent) -> dict[str, Any]:
    """Build the JSON body posted for an event.

    Args:
        event: Event to serialize.

    Returns:
        Ordered dictionary matching the wire format of the event's kind.

    Raises:
        TypeError: If event is not a known SSID event.
    """
    if not isinstance(event, (ChangeEvent, StartupEvent, ShutdownEvent)):
        raise TypeError(f"Unsupported event type: {type(event).__name__}")

    timestamp = format_timestamp(event.timestamp)

    if isinstance(event, ChangeEvent):
        return {
            "timestamp": timestamp,
            "previousSSID": event.previous_ssid or NO_SSID,
            "newSSID": event.new_ssid,
        }
    if isinstance(event, StartupEvent):
        return {
            "timestamp": timestamp,
            "event": event.kind.value,
            "currentSSID": event.current_ssid or NO_SSID,
            "message": STARTED_MESSAGE,
        }
    return {
        "timestamp": timestamp,
        "event": event.kind.value,
        "currentSSID": event.current_ssid or NO_SSID,
        "message": STOPPED_MESSAGE,
    }
