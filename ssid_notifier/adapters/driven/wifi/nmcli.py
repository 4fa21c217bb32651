"""NetworkManager (nmcli) backed SSID reader and network observer.

Requires the ``nmcli`` binary. Reading SSIDs may need the caller to be
allowed by polkit to query wifi devices.
"""

import asyncio
import contextlib
import logging
import os
import re

from ssid_notifier.core.exceptions import ObserverRegistrationError, SsidReadError
from ssid_notifier.ports.network import NetworkObserverPort, SsidReaderPort, WifiSignalCallback

__all__ = ["NmcliSsidReader", "NmcliMonitorObserver", "parse_active_ssid"]

logger = logging.getLogger(__name__)

NMCLI = "nmcli"
READ_TIMEOUT_SEC = 5.0
_ESCAPE = re.compile(r"\\(.)")


def parse_active_ssid(output: str) -> str | None:
    """Extract the active SSID from ``nmcli -t -f ACTIVE,SSID`` output.

    Args:
        output: Terse nmcli output, one ``ACTIVE:SSID`` row per line.

    Returns:
        SSID of the row marked ``yes``, or None if no network is active.
    """
    for line in output.splitlines():
        active, sep, ssid = line.partition(":")
        if sep and active == "yes":
            return _ESCAPE.sub(r"\1", ssid) or None
    return None


async def _reap(proc: asyncio.subprocess.Process) -> None:
    """Kill an abandoned nmcli child and wait for it to exit."""
    with contextlib.suppress(ProcessLookupError):
        proc.kill()
    await proc.wait()


class NmcliSsidReader(SsidReaderPort):
    """Reads the associated SSID through ``nmcli device wifi list``."""

    def __init__(self, interface: str | None = None, timeout_sec: float = READ_TIMEOUT_SEC) -> None:
        self.interface = interface
        self.timeout_sec = timeout_sec

    def command(self) -> list[str]:
        cmd = [NMCLI, "-t", "-f", "ACTIVE,SSID", "device", "wifi", "list"]
        if self.interface:
            cmd += ["ifname", self.interface]
        return cmd + ["--rescan", "no"]

    async def read_ssid(self) -> str | None:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command(),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env={**os.environ, "LC_ALL": "C"},
            )
        except OSError as e:
            raise SsidReadError(f"Cannot run {NMCLI}: {e}", cause=e) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), self.timeout_sec)
        except asyncio.TimeoutError as e:
            await _reap(proc)
            raise SsidReadError(f"{NMCLI} timed out after {self.timeout_sec}s", cause=e) from e
        except asyncio.CancelledError:
            await _reap(proc)
            raise

        if proc.returncode != 0:
            raise SsidReadError(
                f"{NMCLI} exited with {proc.returncode}: {stderr.decode(errors='replace').strip()}",
                details={"returncode": proc.returncode},
            )
        return parse_active_ssid(stdout.decode(errors="replace"))


class NmcliMonitorObserver(NetworkObserverPort):
    """Signals on every state line printed by ``nmcli monitor``."""

    def __init__(self) -> None:
        self._proc: asyncio.subprocess.Process | None = None
        self._task: asyncio.Task[None] | None = None

    async def start(self, on_wifi_changed: WifiSignalCallback) -> None:
        try:
            self._proc = await asyncio.create_subprocess_exec(
                NMCLI,
                "monitor",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise ObserverRegistrationError(f"Cannot start '{NMCLI} monitor': {e}", cause=e) from e

        logger.info(f"Watching NetworkManager events (pid {self._proc.pid})")
        self._task = asyncio.create_task(self._read_loop(self._proc, on_wifi_changed))

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

        if self._proc and self._proc.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                self._proc.terminate()
            await self._proc.wait()
        self._proc = None

    async def _read_loop(
        self,
        proc: asyncio.subprocess.Process,
        on_wifi_changed: WifiSignalCallback,
    ) -> None:
        if proc.stdout is None:
            return
        async for raw in proc.stdout:
            line = raw.decode(errors="replace").strip()
            if line:
                logger.debug(f"nmcli: {line}")
                on_wifi_changed()
        logger.warning(f"'{NMCLI} monitor' exited with {await proc.wait()}")
