"""Application services for the remote session engine.

Services are long-lived and shared by the use cases:
- AutoReconnectService: bounded, backed-off reconnect loop per session
- ConnectionHeartbeatService: detects dead sessions and hands them to it

One class per file.
"""

from .cancellation_token import CancellationToken
from .auto_reconnect_service import AutoReconnectService
from .heartbeat_state import HeartbeatState
from .heartbeat_service import ConnectionHeartbeatService

__all__ = [
    "CancellationToken",
    "AutoReconnectService",
    "HeartbeatState",
    "ConnectionHeartbeatService",
]
