"""ISettingsProvider interface."""

from abc import ABC, abstractmethod

from ..entities.auto_reconnect_settings import AutoReconnectSettings
from ..entities.heartbeat_settings import HeartbeatSettings


class ISettingsProvider(ABC):
    """Read access to engine settings.

    Settings are read at the start of every reconnect loop and heartbeat, so
    changes apply to the next loop without restarting anything.
    """

    @abstractmethod
    def get_auto_reconnect_settings(self) -> AutoReconnectSettings:
        """Current auto-reconnect settings."""

    @abstractmethod
    def get_heartbeat_settings(self) -> HeartbeatSettings:
        """Current heartbeat settings."""
