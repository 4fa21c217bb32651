"""Tests for delivery metrics collection."""

from ssid_notifier.adapters.driven.metrics.delivery_metrics import DeliveryMetrics
from ssid_notifier.ports.delivery import FailureKind
from ssid_notifier.ports.events import EventKind
from ssid_notifier.ports.metrics import DeliveryAttemptDto

__all__ = []


def attempt(
    start: float = 100.0,
    end: float = 100.0,
    status: int | None = 200,
    failure: FailureKind | None = None,
) -> DeliveryAttemptDto:
    return DeliveryAttemptDto(
        event_kind=EventKind.CHANGED,
        started_at_sec=start,
        finished_at_sec=end,
        is_failed=failure is not None,
        status_code=status,
        failure_kind=failure,
    )


def test_metrics_initialization() -> None:
    """Metrics should initialize with empty window."""
    metrics = DeliveryMetrics()
    assert str(metrics) == "Metrics: waiting for data …"


def test_metrics_records_attempt() -> None:
    """Metrics should record delivery attempts."""
    metrics = DeliveryMetrics(window_size=10)
    metrics.update(attempt(start=100.0, end=100.5))

    assert "waiting for data" not in str(metrics)
    assert "status=200" in str(metrics)


def test_metrics_calculates_latency() -> None:
    """Metrics should report latency in milliseconds."""
    metrics = DeliveryMetrics(window_size=10)
    metrics.update(attempt(start=100.0, end=100.25))

    assert "latency= 250.0 ms" in str(metrics)


def test_metrics_splits_failure_kinds() -> None:
    """Metrics should count transport and non-2xx failures separately."""
    metrics = DeliveryMetrics(window_size=10)

    for _ in range(7):
        metrics.update(attempt())
    metrics.update(attempt(status=None, failure=FailureKind.TRANSPORT))
    for _ in range(2):
        metrics.update(attempt(status=500, failure=FailureKind.NON_SUCCESS_STATUS))

    output = str(metrics)
    assert "fail= 30.0%" in output
    assert "transport=1" in output
    assert "non2xx=2" in output


def test_metrics_reports_zero_status_without_response() -> None:
    """Attempts without a response should show status 0."""
    metrics = DeliveryMetrics()
    metrics.update(attempt(status=None, failure=FailureKind.TRANSPORT))

    assert "status=  0" in str(metrics)


def test_metrics_respects_window_size() -> None:
    """Metrics should maintain sliding window of specified size."""
    metrics = DeliveryMetrics(window_size=5)

    for i in range(10):
        metrics.update(attempt(start=100.0 + i, end=100.0 + i))

    output = str(metrics)
    assert "win=5/5" in output
    assert "total=10" in output
