"""In-memory sliding-window metrics for event deliveries."""

from __future__ import annotations

import statistics
from collections import deque
from dataclasses import dataclass

from ssid_notifier.ports.delivery import FailureKind
from ssid_notifier.ports.metrics import DeliveryAttemptDto, MetricsPort

__all__ = ["DeliveryMetrics"]


@dataclass(slots=True, frozen=True)
class _Sample:
    """Internal record for one delivery attempt."""

    latency_ms: float
    failed: bool
    status_code: int
    failure_kind: FailureKind | None


class DeliveryMetrics(MetricsPort):
    """Fast, lock-free metrics for async context.

    Tracks:
    - Average latency (request start to outcome).
    - Failure rate, split into transport and non-2xx failures.
    - Last status code (0 when no response arrived).
    - Total attempts seen.

    Not thread-safe; create one instance per event loop.
    """

    def __init__(self, *, window_size: int = 100) -> None:
        """Initialize metrics collector.

        Args:
            window_size: Number of recent attempts to keep for statistics.
        """
        self._window: deque[_Sample] = deque(maxlen=window_size)
        self._total_seen: int = 0

    def update(self, attempt: DeliveryAttemptDto) -> None:
        """Record a finished delivery attempt.

        Args:
            attempt: Delivery attempt with timing and result info.
        """
        latency_ms = (attempt.finished_at_sec - attempt.started_at_sec) * 1_000.0
        self._window.append(
            _Sample(
                latency_ms=latency_ms,
                failed=attempt.is_failed,
                status_code=attempt.status_code or 0,
                failure_kind=attempt.failure_kind,
            )
        )
        self._total_seen += 1

    def __str__(self) -> str:
        """Return human-readable one-line summary for logging.

        Returns:
            Formatted metrics string.
        """
        if not self._window:
            return "Metrics: waiting for data …"

        n_window = len(self._window)
        failures = sum(1 for s in self._window if s.failed)
        transport = sum(1 for s in self._window if s.failure_kind is FailureKind.TRANSPORT)
        fail_pct = (failures / n_window) * 100
        avg_latency = statistics.fmean(s.latency_ms for s in self._window)
        last = self._window[-1]

        return (
            f"latency={avg_latency:6.1f} ms | "
            f"status={last.status_code:3d} | "
            f"fail={fail_pct:5.1f}% | "
            f"transport={transport} | "
            f"non2xx={failures - transport} | "
            f"win={n_window}/{self._window.maxlen} | "
            f"total={self._total_seen}"
        )
