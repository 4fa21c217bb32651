"""Notifier backed by a dedicated logger."""

import logging

from ssid_notifier.ports.notifications import NotifierPort

__all__ = ["LogNotifier"]

NOTIFICATIONS_LOGGER = "ssid_notifier.notifications"


class LogNotifier(NotifierPort):
    """Writes user-facing notifications to their own logger.

    Hosts can attach a handler to ``ssid_notifier.notifications`` to turn
    these into toasts or desktop notifications.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(NOTIFICATIONS_LOGGER)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)
