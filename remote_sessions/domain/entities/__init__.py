"""Domain entities.

One class per file.
"""

from .auto_reconnect_settings import AutoReconnectSettings
from .connect_result import ConnectResult
from .heartbeat_settings import HeartbeatSettings
from .host_config import HostConfig
from .session_record import SessionRecord

__all__ = [
    "AutoReconnectSettings",
    "ConnectResult",
    "HeartbeatSettings",
    "HostConfig",
    "SessionRecord",
]
