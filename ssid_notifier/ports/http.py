"""HTTP port definition (DTO)."""

from dataclasses import dataclass
from typing import Any

from ssid_notifier.ports.events import EventKind

__all__ = ["HttpPort"]


@dataclass
class HttpPort:
    """HTTP request to be sent by the dispatcher.

    Decouples core dispatch logic from HTTP implementation details.

    Attributes:
        url: Target HTTP endpoint URL.
        payload: JSON-serializable dictionary to send as request body.
        event_kind: Kind of event carried, for logs and metrics.
    """

    url: str
    payload: dict[str, Any]
    event_kind: EventKind
