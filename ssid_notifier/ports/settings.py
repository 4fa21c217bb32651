"""Monitor configuration port (DTO)."""

from dataclasses import dataclass

__all__ = ["MonitorConfig"]


@dataclass(frozen=True)
class MonitorConfig:
    """Configuration for one monitoring session.

    Immutable once the session starts; validated by the lifecycle.

    Attributes:
        endpoint_url: Absolute HTTP(S) URL where events are posted.
    """

    endpoint_url: str
