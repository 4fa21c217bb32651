"""User-visible notification port (interface)."""

from typing import Protocol

__all__ = ["NotifierPort"]


class NotifierPort(Protocol):
    """Surface for passive operator feedback (toasts, desktop notices, logs).

    Implementations must never raise and never block.
    """

    def info(self, message: str, /) -> None:
        """Report a positive outcome."""
        ...

    def warning(self, message: str, /) -> None:
        """Report a degraded but non-fatal condition."""
        ...

    def error(self, message: str, /) -> None:
        """Report a failed operation."""
        ...
