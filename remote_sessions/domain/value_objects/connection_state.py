"""Connection state value objects.

ConnectionState is the stored per-cycle state of a session. SessionPhase is
derived from ConnectionState plus the orthogonal reconnecting flag and is what
a display layer would render.
"""

from enum import Enum


class ConnectionState(Enum):
    """Connection states of a session record."""

    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"
    FAILED = "FAILED"


class SessionPhase(Enum):
    """Single canonical phase combining state and reconnect bookkeeping.

    State table:
        CONNECTING + not reconnecting -> CONNECTING
        CONNECTING + reconnecting     -> RECONNECTING (attempt in flight)
        FAILED     + reconnecting     -> BACKOFF (waiting before next attempt)
        FAILED     + not reconnecting -> FAILED
        CONNECTED                     -> CONNECTED
    """

    CONNECTING = "connecting"
    RECONNECTING = "reconnecting"
    BACKOFF = "backoff"
    CONNECTED = "connected"
    FAILED = "failed"

    @classmethod
    def from_state(cls, state: ConnectionState, is_reconnecting: bool) -> "SessionPhase":
        """Derive the phase for a record.

        Example:
            >>> SessionPhase.from_state(ConnectionState.FAILED, True)
            <SessionPhase.BACKOFF: 'backoff'>
        """
        if state is ConnectionState.CONNECTED:
            return cls.CONNECTED
        if state is ConnectionState.CONNECTING:
            return cls.RECONNECTING if is_reconnecting else cls.CONNECTING
        return cls.BACKOFF if is_reconnecting else cls.FAILED
