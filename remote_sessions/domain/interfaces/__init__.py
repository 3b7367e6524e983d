"""Domain interfaces for the remote session engine.

This module defines the contracts (interfaces) that infrastructure implementations
must fulfill. Using these interfaces enables:
- Dependency Inversion: the reconnect loop doesn't depend on wire clients
- Testability: Easy to fake implementations for testing
- Flexibility: Swap backends (OpenSSH, paramiko, asyncssh...) without changing engine logic
"""

from .i_connection_handler import IConnectionHandler, LogCallback
from .i_network_monitor import INetworkMonitor
from .i_protocol_backend import IProtocolBackend
from .i_session_registry import ISessionRegistry, RegistryListener
from .i_settings_provider import ISettingsProvider

__all__ = [
    "IConnectionHandler",
    "LogCallback",
    "INetworkMonitor",
    "IProtocolBackend",
    "ISessionRegistry",
    "RegistryListener",
    "ISettingsProvider",
]
