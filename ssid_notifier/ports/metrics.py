"""Metrics port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ssid_notifier.ports.delivery import FailureKind
from ssid_notifier.ports.events import EventKind

__all__ = ["DeliveryAttemptDto", "MetricsPort"]


@dataclass(slots=True, frozen=True)
class DeliveryAttemptDto:
    """Immutable snapshot of a single delivery attempt.

    Attributes:
        event_kind: Kind of event that was posted.
        started_at_sec: Monotonic seconds when the request left the process.
        finished_at_sec: Monotonic seconds when the outcome was known.
        is_failed: True if the event was not delivered.
        status_code: HTTP status code when a response arrived; None otherwise.
        failure_kind: Fault class when failed; None otherwise.
    """

    event_kind: EventKind
    started_at_sec: float
    finished_at_sec: float
    is_failed: bool = False
    status_code: int | None = None
    failure_kind: FailureKind | None = None


class MetricsPort(Protocol):
    """Interface for recording delivery attempt metrics.

    Implementations must be async-safe and non-blocking.
    The HTTP adapter calls update() after each attempt; presentation layers
    call __str__() to render summaries.
    """

    def update(self, attempt: DeliveryAttemptDto, /) -> None:
        """Record a finished delivery attempt.

        Args:
            attempt: The attempt to record.
        """
        ...

    def __str__(self) -> str:
        """Return concise textual summary for humans.

        Returns:
            Formatted metrics string.
        """
        ...
