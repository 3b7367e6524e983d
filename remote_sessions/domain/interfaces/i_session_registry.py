"""ISessionRegistry interface for the session store."""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

from ..entities.host_config import HostConfig
from ..entities.session_record import SessionRecord

# Called with (record id, new snapshot or None when removed)
RegistryListener = Callable[[str, Optional[SessionRecord]], None]


class ISessionRegistry(ABC):
    """Interface for the single source of truth for session records.

    Every mutation is one atomic read-modify-write. Updates addressed to a
    missing record are ignored and return None; they never recreate it.
    """

    @abstractmethod
    def create(
        self, host_config: HostConfig, label: Optional[str] = None
    ) -> SessionRecord:
        """Create a record in CONNECTING state and return it."""

    @abstractmethod
    def get(self, record_id: str) -> Optional[SessionRecord]:
        """Get a snapshot of a record, or None if it does not exist."""

    @abstractmethod
    def list(self) -> List[SessionRecord]:
        """Snapshots of all records, in creation order."""

    @abstractmethod
    def update_connection_state(
        self, record_id: str, **changes: Any
    ) -> Optional[SessionRecord]:
        """Update connection fields (state, logs, error, session handles).

        Raises:
            InvalidStateTransitionError: If the state change is illegal
            ValueError: If a field is not a connection field
        """

    @abstractmethod
    def update_reconnect_state(
        self, record_id: str, **changes: Any
    ) -> Optional[SessionRecord]:
        """Update reconnect bookkeeping (retry count, flags)."""

    @abstractmethod
    def append_log(self, record_id: str, line: str) -> Optional[SessionRecord]:
        """Append one line to the current cycle's connection log."""

    @abstractmethod
    def cancel(self, record_id: str) -> Optional[SessionRecord]:
        """Flag reconnecting as cancelled by the user."""

    @abstractmethod
    def reset_reconnect_state(self, record_id: str) -> Optional[SessionRecord]:
        """Clear retry count and reconnect flags."""

    @abstractmethod
    def remove(self, record_id: str) -> Optional[SessionRecord]:
        """Remove a record and return its last snapshot."""

    @abstractmethod
    def subscribe(self, listener: RegistryListener) -> Callable[[], None]:
        """Register a change listener; returns an unsubscribe function."""
