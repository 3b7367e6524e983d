"""Network availability tracking."""

from .connectivity_probe import ConnectivityProbe
from .network_state_monitor import NetworkStateMonitor

__all__ = [
    "ConnectivityProbe",
    "NetworkStateMonitor",
]
