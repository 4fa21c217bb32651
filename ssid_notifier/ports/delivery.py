"""Delivery outcome definitions (DTOs)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["Delivered", "Failed", "FailureKind", "DeliveryResult"]


class FailureKind(str, Enum):
    """Fault class of a failed delivery, for operator-facing diagnostics."""

    TRANSPORT = "transport"
    NON_SUCCESS_STATUS = "non-2xx response"


@dataclass(slots=True, frozen=True)
class Delivered:
    """Endpoint accepted the event.

    Attributes:
        status_code: HTTP status returned by the endpoint (always 200).
    """

    status_code: int


@dataclass(slots=True, frozen=True)
class Failed:
    """Event could not be delivered; the event is dropped.

    Attributes:
        kind: Whether the exchange failed or the endpoint rejected it.
        reason: Human-readable detail (exception text or status line).
        status_code: HTTP status when a response arrived; None otherwise.
    """

    kind: FailureKind
    reason: str
    status_code: int | None = None


DeliveryResult = Delivered | Failed
