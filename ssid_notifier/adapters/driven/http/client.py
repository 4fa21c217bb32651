"""HTTP client adapter with bounded timeouts and metrics integration."""

import asyncio
import logging
from types import TracebackType

import aiohttp
from aiohttp import ClientTimeout

from ssid_notifier.core.exceptions import DeliveryError
from ssid_notifier.ports.delivery import Delivered, DeliveryResult, Failed, FailureKind
from ssid_notifier.ports.http import HttpPort
from ssid_notifier.ports.metrics import DeliveryAttemptDto, MetricsPort

__all__ = ["HttpClient", "TRANSPORT_ERRORS"]

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 5.0
READ_TIMEOUT = 5.0
PROBE_TIMEOUT = 10
ACCEPTED_STATUS = 200

# Exceptions meaning the HTTP exchange itself failed
TRANSPORT_ERRORS = (
    aiohttp.ClientError,  # DNS, connection refused, disconnects, payload errors
    asyncio.TimeoutError,  # Connect or read timeout
)


class HttpClient:
    """HTTP client posting SSID events, one attempt per event.

    Features:
    - Connect and read timeouts bounded independently.
    - Transport errors and non-200 responses folded into DeliveryResult.
    - Metrics collection (latency, failure rate).
    - Context manager for proper resource cleanup.
    - Health check/probe functionality.
    """

    def __init__(
        self,
        metrics: MetricsPort | None = None,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
    ) -> None:
        """Initialize HTTP client.

        Args:
            metrics: Optional metrics collector to track attempts.
            connect_timeout: Seconds allowed to establish a connection.
            read_timeout: Seconds allowed between reads of the response.
        """
        self.metrics = metrics
        self.timeout = ClientTimeout(
            total=None,
            connect=connect_timeout,
            sock_connect=connect_timeout,
            sock_read=read_timeout,
        )
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    async def probe(self, url: str, timeout: int = PROBE_TIMEOUT) -> bool:
        """Check if an HTTP endpoint is reachable (single GET).

        Args:
            url: URL to probe.
            timeout: Timeout in seconds.

        Returns:
            True if reachable (200 <= status < 300), False otherwise.
        """
        logger.info(f"Probing endpoint {url}...")
        try:
            if self.session is None:
                raise RuntimeError("Session not initialized; use 'async with' context manager")
            async with self.session.get(
                url, timeout=ClientTimeout(total=timeout), allow_redirects=True
            ) as resp:
                is_healthy = 200 <= resp.status < 300
                logger.info(f"Probe for {url} returned status {resp.status}")
                return is_healthy
        except Exception as e:
            logger.warning(f"Probe failed for {url}: {e}")
            return False

    async def _post_once(self, req: HttpPort) -> int:
        """Single HTTP POST request.

        Args:
            req: HTTP request object with URL and payload.

        Returns:
            HTTP status code (always ACCEPTED_STATUS).

        Raises:
            RuntimeError: If session not initialized.
            DeliveryError: On transport failure or non-200 response.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        try:
            async with self.session.post(req.url, json=req.payload) as resp:
                status = resp.status
                reason = resp.reason or ""
        except TRANSPORT_ERRORS as e:
            detail = str(e) or type(e).__name__
            raise DeliveryError(FailureKind.TRANSPORT, detail, cause=e) from e

        if status != ACCEPTED_STATUS:
            raise DeliveryError(
                FailureKind.NON_SUCCESS_STATUS,
                f"HTTP {status} {reason}".strip(),
                status_code=status,
            )
        return status

    async def send(self, req: HttpPort) -> DeliveryResult:
        """Send one event and record metrics.

        Args:
            req: HTTP request object.

        Returns:
            Delivered on HTTP 200, Failed otherwise.
        """
        loop = asyncio.get_running_loop()
        started = loop.time()

        try:
            result: DeliveryResult = Delivered(status_code=await self._post_once(req))
        except DeliveryError as e:
            logger.debug(f"Delivery of {req.event_kind.value} to {req.url} failed: {e}")
            result = Failed(kind=e.kind, reason=e.message, status_code=e.status_code)

        if self.metrics:
            failed = isinstance(result, Failed)
            self.metrics.update(
                DeliveryAttemptDto(
                    event_kind=req.event_kind,
                    started_at_sec=started,
                    finished_at_sec=loop.time(),
                    is_failed=failed,
                    status_code=result.status_code,
                    failure_kind=result.kind if isinstance(result, Failed) else None,
                )
            )
            logger.info(f"HTTP metrics: {self.metrics}")

        return result
