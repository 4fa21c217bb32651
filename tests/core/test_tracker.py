"""Tests for SSID change detection."""

from datetime import datetime, timezone

import pytest

from ssid_notifier.core.exceptions import SsidReadError
from ssid_notifier.core.tracker import SsidTracker, normalize_ssid
from ssid_notifier.ports.events import ChangeEvent

__all__ = []

MOMENT = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class SequenceReader:
    """Reader returning preset SSID reads in order (None = not connected)."""

    def __init__(self, *reads: str | None | Exception) -> None:
        self._reads = list(reads)

    async def read_ssid(self) -> str | None:
        value = self._reads.pop(0)
        if isinstance(value, Exception):
            raise value
        return value


def make_tracker(*reads: str | None | Exception) -> SsidTracker:
    return SsidTracker(SequenceReader(*reads), clock=lambda: MOMENT)


async def collect_changes(tracker: SsidTracker, count: int) -> list[ChangeEvent | None]:
    return [await tracker.check_for_change() for _ in range(count)]


@pytest.mark.asyncio
async def test_first_observation_is_a_change_from_none() -> None:
    """Without an initial value, the first SSID should produce a change."""
    tracker = make_tracker("Home")

    event = await tracker.check_for_change()

    assert event == ChangeEvent(timestamp=MOMENT, previous_ssid=None, new_ssid="Home")
    assert tracker.previous_ssid == "Home"


@pytest.mark.asyncio
async def test_repeated_reads_produce_single_change() -> None:
    """Identical reads after an accepted change should be ignored."""
    tracker = make_tracker("Home", "Home", "Home", "Home")

    events = await collect_changes(tracker, 4)

    assert [e is not None for e in events] == [True, False, False, False]


@pytest.mark.asyncio
async def test_drop_and_reconnect_to_same_ssid_is_silent() -> None:
    """Losing wifi should neither emit nor clear the previous SSID."""
    tracker = make_tracker("Home", None, None, "Home")

    events = await collect_changes(tracker, 4)

    assert events[1:] == [None, None, None]
    assert tracker.previous_ssid == "Home"


@pytest.mark.asyncio
async def test_drop_then_new_network_reports_pre_drop_ssid() -> None:
    """Reconnecting elsewhere should report the SSID held before the drop."""
    tracker = make_tracker(None, "Cafe")
    tracker.reset("Home")

    events = await collect_changes(tracker, 2)

    assert events[0] is None
    assert events[1] is not None
    assert (events[1].previous_ssid, events[1].new_ssid) == ("Home", "Cafe")


@pytest.mark.asyncio
async def test_change_emitted_iff_differs_from_last_accepted() -> None:
    """Only reads differing from the last accepted SSID should emit."""
    reads = ["A", "A", None, "B", "B", None, "A", "C", None, "C"]
    tracker = make_tracker(*reads)

    events = await collect_changes(tracker, len(reads))

    emitted = [(e.previous_ssid, e.new_ssid) for e in events if e is not None]
    assert emitted == [(None, "A"), ("A", "B"), ("B", "A"), ("A", "C")]


@pytest.mark.asyncio
async def test_read_errors_are_treated_as_no_ssid() -> None:
    """SsidReadError should look like 'not connected' to callers."""
    tracker = make_tracker(SsidReadError("permission denied"), "Home")
    tracker.reset("Home")

    assert await tracker.current_ssid() is None
    assert await tracker.check_for_change() is None


@pytest.mark.asyncio
async def test_reset_seeds_previous_ssid() -> None:
    """A seeded initial value should not produce a change for the same SSID."""
    tracker = make_tracker("Home")
    tracker.reset("Home")

    assert await tracker.check_for_change() is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('"Home"', "Home"),
        ("Home", "Home"),
        ("<unknown ssid>", None),
        ("", None),
        ("   ", None),
        (None, None),
        ('"', '"'),
        (" Home ", " Home "),
        ('" Cafe"', " Cafe"),
        ('"  "', None),
    ],
)
def test_normalize_ssid(raw: str | None, expected: str | None) -> None:
    """Quotes should be stripped and placeholders mapped to None."""
    assert normalize_ssid(raw) == expected


@pytest.mark.asyncio
async def test_whitespace_only_difference_is_a_change() -> None:
    """SSIDs differing only in surrounding spaces are distinct networks."""
    tracker = make_tracker("Home ")
    tracker.reset("Home")

    event = await tracker.check_for_change()

    assert event is not None
    assert event.new_ssid == "Home "
