"""Application entrypoint."""

import asyncio
import logging

from ssid_notifier.adapters.driven.config.settings import Settings, load_settings
from ssid_notifier.adapters.driven.http.client import HttpClient
from ssid_notifier.adapters.driven.logging.logging_config import configure_logs
from ssid_notifier.adapters.driven.metrics.delivery_metrics import DeliveryMetrics
from ssid_notifier.adapters.driven.notifications.log_notifier import LogNotifier
from ssid_notifier.adapters.driven.wifi.nmcli import NmcliMonitorObserver, NmcliSsidReader
from ssid_notifier.adapters.driven.wifi.polling import PollingNetworkObserver
from ssid_notifier.adapters.driving.signals import make_stop_on_sigterm
from ssid_notifier.core.dispatcher import EventDispatcher
from ssid_notifier.core.exceptions import ConfigError
from ssid_notifier.core.lifecycle import MonitorLifecycle
from ssid_notifier.core.tracker import SsidTracker
from ssid_notifier.ports.network import NetworkObserverPort
from ssid_notifier.ports.settings import MonitorConfig

__all__ = ["main", "run"]

logger = logging.getLogger(__name__)


async def main() -> None:
    """Start the SSID notifier service.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Optionally probe endpoint health.
    4. Start the monitoring session.
    5. On SIGTERM, stop the session and let in-flight deliveries finish.
    """
    configure_logs()
    logger.info("Starting SSID notifier service...")

    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check SSID_ENDPOINT_URL, HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT "
            "and NETWORK_OBSERVER.",
            exc,
        )
        return

    metrics = DeliveryMetrics()
    http_client = HttpClient(
        metrics=metrics,
        connect_timeout=config.connect_timeout_sec,
        read_timeout=config.read_timeout_sec,
    )

    async with http_client as http:
        if not await optional_endpoint_health_check(config, http):
            return

        notifier = LogNotifier()
        dispatcher = EventDispatcher(send_fn=http.send, notifier=notifier)
        lifecycle = MonitorLifecycle(
            observer=build_observer(config),
            tracker=SsidTracker(NmcliSsidReader(interface=config.wifi_interface)),
            dispatcher=dispatcher,
            notifier=notifier,
        )
        stop = make_stop_on_sigterm()

        try:
            await lifecycle.start(MonitorConfig(endpoint_url=config.endpoint_url))
        except ConfigError as e:
            logger.error(f"Monitoring not started: {e}")
            return

        try:
            await stop.wait()
        finally:
            await lifecycle.stop()
            await dispatcher.drain()

        logger.info("SSID notifier stopped.")


def build_observer(config: Settings) -> NetworkObserverPort:
    """Select the network observer configured for this host."""
    if config.observer == "poll":
        return PollingNetworkObserver(interval_sec=config.poll_interval_sec)
    return NmcliMonitorObserver()


async def optional_endpoint_health_check(config: Settings, http: HttpClient) -> bool:
    """Perform optional health check before starting monitoring.

    Only runs if HEALTH_CHECK_ENDPOINT is configured.

    Args:
        config: Runtime settings.
        http: HTTP client for probing.

    Returns:
        True if healthy or check disabled, False if check failed.
    """
    if config.http_health_endpoint:
        logger.info(f"Performing health check on {config.http_health_endpoint}...")
        if not await http.probe(url=config.http_health_endpoint):
            logger.error(
                f"Health check failed for {config.http_health_endpoint}, aborting startup"
            )
            return False

        logger.info("Health check passed, starting monitoring...")
    return True


def run() -> None:
    """Console script wrapper around main()."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C).")


if __name__ == "__main__":
    run()
