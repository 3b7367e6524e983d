"""SessionRecord entity.

Lifecycle state for one attempted or active remote connection (one tab).
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..value_objects.connection_state import ConnectionState, SessionPhase
from .host_config import HostConfig


@dataclass(frozen=True)
class SessionRecord:
    """Immutable snapshot of a session.

    The registry replaces records wholesale on every update, so a snapshot
    held by a caller never changes underneath it.

    Invariants (enforced by the registry):
        - connection_error is set if and only if connection_state is FAILED
        - connection_logs belong to the current cycle only

    Attributes:
        id: Registry identifier (tab id)
        host_config: Host the session connects to
        label: Display label
        connection_state: Current cycle state
        connection_logs: Ordered log lines of the current cycle
        connection_error: Failure message while FAILED
        session_id: Backend session handle once connected
        file_session_id: Backend file session handle once connected
        auto_reconnect_retry_count: Current reconnect attempt, 0 when idle
        is_reconnecting: True while an attempt or its backoff wait runs
        reconnect_cancelled: Set when the user cancelled reconnecting
        just_connected: Short-lived indicator raised on successful connect
    """

    id: str
    host_config: HostConfig
    label: str = ""
    connection_state: ConnectionState = ConnectionState.CONNECTING
    connection_logs: Tuple[str, ...] = field(default_factory=tuple)
    connection_error: Optional[str] = None
    session_id: Optional[str] = None
    file_session_id: Optional[str] = None
    auto_reconnect_retry_count: int = 0
    is_reconnecting: bool = False
    reconnect_cancelled: bool = False
    just_connected: bool = False

    @property
    def phase(self) -> SessionPhase:
        """Combined display phase."""
        return SessionPhase.from_state(self.connection_state, self.is_reconnecting)

    @property
    def is_connected(self) -> bool:
        return self.connection_state is ConnectionState.CONNECTED

    @property
    def is_failed(self) -> bool:
        return self.connection_state is ConnectionState.FAILED
