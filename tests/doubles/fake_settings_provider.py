"""Fake settings provider holding settings in memory."""

from dataclasses import replace

from remote_sessions.domain.entities import AutoReconnectSettings, HeartbeatSettings
from remote_sessions.domain.interfaces import ISettingsProvider


class FakeSettingsProvider(ISettingsProvider):
    """In-memory settings.

    Example:
        >>> settings = FakeSettingsProvider(max_retries=5, delay=0)
        >>> settings.get_auto_reconnect_settings().max_retries
        5
    """

    def __init__(self, heartbeat: HeartbeatSettings = None, **auto_reconnect):
        self.auto_reconnect = AutoReconnectSettings(**auto_reconnect)
        self.heartbeat = heartbeat or HeartbeatSettings(enabled=False)
        self.reads = 0

    def get_auto_reconnect_settings(self) -> AutoReconnectSettings:
        self.reads += 1
        return self.auto_reconnect

    def get_heartbeat_settings(self) -> HeartbeatSettings:
        return self.heartbeat

    def update(self, **changes) -> None:
        self.auto_reconnect = replace(self.auto_reconnect, **changes)
