"""Event delivery with fire-and-forget and awaited modes."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ssid_notifier.core.payload import to_payload
from ssid_notifier.ports.delivery import Delivered, DeliveryResult, Failed, FailureKind
from ssid_notifier.ports.events import EventKind, SsidEvent
from ssid_notifier.ports.http import HttpPort
from ssid_notifier.ports.notifications import NotifierPort

__all__ = ["EventDispatcher", "describe_failure"]

logger = logging.getLogger(__name__)

SendFn = Callable[[HttpPort], Awaitable[DeliveryResult]]


def describe_failure(event_kind: EventKind, result: Failed) -> str:
    """Build an operator-facing message naming the event and the fault class.

    Args:
        event_kind: Kind of event that was lost.
        result: Failed delivery outcome.

    Returns:
        One-line description.
    """
    if result.kind is FailureKind.NON_SUCCESS_STATUS:
        return (
            f"Failed to deliver {event_kind.value}: {result.kind.value} "
            f"(server responded with {result.status_code})"
        )
    return f"Failed to deliver {event_kind.value}: {result.kind.value} error ({result.reason})"


class EventDispatcher:
    """Serializes SSID events and posts them to the configured endpoint.

    Each event gets exactly one attempt. Failures are reported and the event
    is dropped; nothing is queued for retry.
    """

    def __init__(self, send_fn: SendFn, notifier: NotifierPort | None = None) -> None:
        """Initialize dispatcher.

        Args:
            send_fn: Async function performing one HTTP POST.
            notifier: Optional surface for user-visible outcome reports.
        """
        self._send_fn = send_fn
        self._notifier = notifier
        self._pending: set[asyncio.Task[DeliveryResult]] = set()

    @property
    def pending(self) -> int:
        """Number of fire-and-forget deliveries still in flight."""
        return len(self._pending)

    async def deliver(self, event: SsidEvent, endpoint_url: str) -> DeliveryResult:
        """Serialize and post one event, then report the outcome.

        Args:
            event: Event to deliver.
            endpoint_url: Endpoint receiving the POST.

        Returns:
            Delivered on HTTP 200, Failed otherwise. Never raises.
        """
        req = HttpPort(url=endpoint_url, payload=to_payload(event), event_kind=event.kind)

        try:
            result = await self._send_fn(req)
        except asyncio.CancelledError:
            raise
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error delivering {event.kind.value}: {e}", exc_info=True)
            result = Failed(kind=FailureKind.TRANSPORT, reason=str(e) or type(e).__name__)

        self._report(event.kind, result)
        return result

    def dispatch_async(self, event: SsidEvent, endpoint_url: str) -> asyncio.Task[DeliveryResult]:
        """Deliver an event in the background without blocking the caller.

        Args:
            event: Event to deliver.
            endpoint_url: Endpoint receiving the POST.

        Returns:
            Task resolving to the delivery result.
        """
        task = asyncio.get_running_loop().create_task(self.deliver(event, endpoint_url))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def dispatch_await(self, event: SsidEvent, endpoint_url: str) -> DeliveryResult:
        """Deliver an event and wait for the outcome (bounded by client timeouts)."""
        return await self.deliver(event, endpoint_url)

    async def drain(self) -> None:
        """Wait for in-flight background deliveries to finish on their own."""
        if self._pending:
            logger.debug(f"Waiting for {len(self._pending)} in-flight deliveries")
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _report(self, event_kind: EventKind, result: DeliveryResult) -> None:
        if isinstance(result, Delivered):
            logger.info(f"Delivered {event_kind.value} (status {result.status_code})")
            if event_kind is EventKind.STARTED and self._notifier:
                self._notifier.info("Connected to logging server")
            return

        message = describe_failure(event_kind, result)
        logger.warning(message)
        if self._notifier:
            self._notifier.error(message)
