"""Healthcheck validator for container orchestration."""

import logging
import shutil
from pathlib import Path

from ssid_notifier.adapters.driven.config.settings import Settings, load_settings
from ssid_notifier.adapters.driven.logging.logging_config import configure_logs
from ssid_notifier.adapters.driven.wifi.nmcli import NMCLI

__all__ = ["host_problems", "main"]

logger = logging.getLogger(__name__)

SYS_NET = Path("/sys/class/net")


def host_problems(settings: Settings, sys_net: Path = SYS_NET) -> list[str]:
    """List what prevents this host from reading SSIDs with the given settings.

    Args:
        settings: Loaded notifier settings.
        sys_net: Directory listing the host's network interfaces.

    Returns:
        Human readable problems, empty when the host is usable.
    """
    problems = []
    if shutil.which(NMCLI) is None:
        # Both the SSID reader and the nmcli observer shell out to it
        problems.append(f"'{NMCLI}' not found on PATH (observer={settings.observer})")
    if settings.wifi_interface and not (sys_net / settings.wifi_interface).exists():
        problems.append(f"Wifi interface '{settings.wifi_interface}' does not exist")
    return problems


def main() -> int:
    """Run health check for container orchestration.

    Validates:
    - Required environment variables are set.
    - Endpoint URLs, timeouts and the observer choice are valid.
    - nmcli is installed and the configured wifi interface exists.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings()
    except Exception as exc:
        logger.error(f"Notifier healthcheck FAILED (config): {exc}")
        return 1

    problems = host_problems(settings)
    if problems:
        logger.error(f"Notifier healthcheck FAILED (host): {'; '.join(problems)}")
        return 1

    logger.info(f"Notifier healthcheck OK (observer={settings.observer})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
