"""Monitoring session state machine."""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import HttpUrl, TypeAdapter, ValidationError

from ssid_notifier.core.dispatcher import EventDispatcher
from ssid_notifier.core.exceptions import (
    ConfigError,
    ObserverRegistrationError,
    SessionAlreadyRunningError,
)
from ssid_notifier.core.payload import utc_now
from ssid_notifier.core.tracker import SsidTracker
from ssid_notifier.ports.events import ShutdownEvent, StartupEvent
from ssid_notifier.ports.network import NetworkObserverPort
from ssid_notifier.ports.notifications import NotifierPort
from ssid_notifier.ports.settings import MonitorConfig

__all__ = ["MonitorLifecycle", "MonitorState", "MonitorStatus", "validate_endpoint_url"]

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)


class MonitorState(str, Enum):
    """Lifecycle states of a monitoring session."""

    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"


@dataclass(frozen=True)
class MonitorStatus:
    """Snapshot returned to the host.

    Attributes:
        state: Current lifecycle state.
        running: True while a session is Running.
        endpoint_url: Endpoint of the active session, if any.
        degraded: True when the observer could not be registered and only
            manual rechecks produce change events.
    """

    state: MonitorState
    running: bool
    endpoint_url: str | None = None
    degraded: bool = False


def validate_endpoint_url(url: str) -> str:
    """Check that url is a non-empty absolute http:// or https:// URL.

    Args:
        url: Candidate endpoint.

    Returns:
        The URL, unchanged.

    Raises:
        ConfigError: If the URL is empty or not HTTP(S).
    """
    if not url or not url.strip():
        raise ConfigError("Endpoint URL is empty")
    try:
        parsed = _http_url_adapter.validate_python(url)
    except ValidationError as e:
        raise ConfigError(f"Invalid endpoint URL: {url}", cause=e) from e
    if parsed.scheme not in ("http", "https"):
        raise ConfigError(f"Only http:// and https:// endpoints allowed: {url}")
    return url


class MonitorLifecycle:
    """Drives one monitoring session at a time.

    Observer signals are queued and consumed by a single worker task, so the
    tracker is never entered concurrently. Startup and change events are
    dispatched fire-and-forget; the shutdown event is awaited.
    """

    def __init__(
        self,
        observer: NetworkObserverPort,
        tracker: SsidTracker,
        dispatcher: EventDispatcher,
        notifier: NotifierPort | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._observer = observer
        self._tracker = tracker
        self._dispatcher = dispatcher
        self._notifier = notifier
        self._clock = clock

        self._state = MonitorState.IDLE
        self._config: MonitorConfig | None = None
        self._degraded = False
        self._signals: asyncio.Queue[None] | None = None
        self._worker: asyncio.Task[None] | None = None
        self._start_settled: asyncio.Event | None = None

    @property
    def state(self) -> MonitorState:
        return self._state

    def status(self) -> MonitorStatus:
        """Return the current session status."""
        return MonitorStatus(
            state=self._state,
            running=self._state is MonitorState.RUNNING,
            endpoint_url=self._config.endpoint_url if self._config else None,
            degraded=self._degraded,
        )

    async def start(self, config: MonitorConfig) -> None:
        """Start a monitoring session.

        Args:
            config: Session configuration.

        Raises:
            SessionAlreadyRunningError: If a session is not Idle.
            ConfigError: If the endpoint URL is invalid; state stays Idle.
        """
        if self._state is not MonitorState.IDLE:
            raise SessionAlreadyRunningError(
                f"Monitoring session already {self._state.value}",
                details={"endpoint_url": self._config.endpoint_url if self._config else None},
            )

        self._state = MonitorState.STARTING
        self._start_settled = asyncio.Event()
        try:
            await self._start_session(config)
        finally:
            self._start_settled.set()

    async def _start_session(self, config: MonitorConfig) -> None:
        """Starting -> Running, or back to Idle on failure."""
        try:
            validate_endpoint_url(config.endpoint_url)
        except ConfigError as e:
            self._state = MonitorState.IDLE
            logger.error(f"Refusing to start monitoring (config): {e}")
            if self._notifier:
                self._notifier.error(f"Invalid endpoint URL: {e}")
            raise

        logger.info(f"Starting wifi monitoring with endpoint: {config.endpoint_url}")
        self._config = config
        self._degraded = False
        self._signals = asyncio.Queue()

        try:
            initial_ssid = await self._begin_session()
        except Exception:
            self._tracker.reset()
            self._signals = None
            self._config = None
            self._state = MonitorState.IDLE
            raise

        self._dispatcher.dispatch_async(
            StartupEvent(timestamp=self._clock(), current_ssid=initial_ssid),
            config.endpoint_url,
        )
        self._worker = asyncio.get_running_loop().create_task(
            self._consume_signals(self._signals, config.endpoint_url)
        )
        self._state = MonitorState.RUNNING

    async def _begin_session(self) -> str | None:
        """Capture the initial SSID and register the observer."""
        self._tracker.reset()
        initial_ssid = await self._tracker.current_ssid()
        self._tracker.reset(initial_ssid)
        logger.info(f"Initial SSID: {initial_ssid}")

        try:
            await self._observer.start(self.recheck)
        except ObserverRegistrationError as e:
            self._degraded = True
            logger.warning(f"Network observer unavailable, manual recheck only: {e}")
            if self._notifier:
                self._notifier.warning("Wifi change notifications unavailable; check permissions")
        return initial_ssid

    def recheck(self) -> None:
        """Request an SSID re-check. Ignored unless a session is active."""
        if self._signals is not None and self._state in (MonitorState.STARTING, MonitorState.RUNNING):
            self._signals.put_nowait(None)

    async def stop(self) -> None:
        """Stop the session, awaiting delivery of the shutdown event.

        In-flight change deliveries are left to finish on their own. A stop
        arriving while the session is Starting waits for startup to settle and
        then stops the session it produced.
        """
        if self._state is MonitorState.STARTING and self._start_settled is not None:
            logger.info("Stop requested while starting, waiting for startup to settle")
            await self._start_settled.wait()

        if self._state is not MonitorState.RUNNING or self._config is None:
            logger.debug(f"Stop ignored, session is {self._state.value}")
            return

        self._state = MonitorState.STOPPING
        config = self._config

        try:
            await self._observer.stop()
        except Exception as e:  # noqa: BLE001
            logger.error(f"Error stopping network observer: {e}")

        if self._worker is not None:
            self._worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker

        try:
            await self._dispatcher.dispatch_await(
                ShutdownEvent(timestamp=self._clock(), current_ssid=self._tracker.previous_ssid),
                config.endpoint_url,
            )
        finally:
            self._tracker.reset()
            self._worker = None
            self._signals = None
            self._config = None
            self._degraded = False
            self._state = MonitorState.IDLE
            logger.info("Wifi monitoring stopped")

    async def _consume_signals(self, signals: asyncio.Queue[None], endpoint_url: str) -> None:
        """Single consumer of observer signals."""
        while True:
            await signals.get()
            try:
                event = await self._tracker.check_for_change()
            except asyncio.CancelledError:
                raise
            except Exception as e:  # noqa: BLE001
                logger.error(f"Unexpected error checking SSID: {e}", exc_info=True)
                continue
            if event is not None:
                self._dispatcher.dispatch_async(event, endpoint_url)
