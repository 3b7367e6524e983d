"""Value objects for the remote session engine."""

from .connection_state import ConnectionState, SessionPhase
from .protocol_type import ProtocolType
from .reconnect_outcome import ReconnectOutcome

__all__ = [
    "ConnectionState",
    "SessionPhase",
    "ProtocolType",
    "ReconnectOutcome",
]
