"""In-memory session registry.

Single source of truth for session records. Records are frozen snapshots
and every public method is a single synchronous read-modify-write, so on one
asyncio event loop no update can interleave with another.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from ...const import ERROR_DEFAULT
from ...domain.entities.host_config import HostConfig
from ...domain.entities.session_record import SessionRecord
from ...domain.exceptions import InvalidStateTransitionError
from ...domain.interfaces import ISessionRegistry, RegistryListener
from ...domain.value_objects.connection_state import ConnectionState
from ..state_machines import ConnectionStateMachine

_LOGGER = logging.getLogger(__name__)

CONNECTION_FIELDS = frozenset(
    {
        "connection_state",
        "connection_logs",
        "connection_error",
        "session_id",
        "file_session_id",
        "just_connected",
    }
)
RECONNECT_FIELDS = frozenset(
    {
        "auto_reconnect_retry_count",
        "is_reconnecting",
        "reconnect_cancelled",
    }
)


class SessionRegistry(ISessionRegistry):
    """Registry of session records keyed by tab id.

    Each record has a ConnectionStateMachine that validates state changes.
    Listeners are notified synchronously after every change with the new
    snapshot, or None when a record is removed.

    Example:
        >>> registry = SessionRegistry()
        >>> record = registry.create(HostConfig(host="example.org"))
        >>> record.connection_state
        <ConnectionState.CONNECTING: 'CONNECTING'>
        >>> registry.update_connection_state(
        ...     record.id, connection_state=ConnectionState.CONNECTED, session_id="s1"
        ... ).session_id
        's1'
    """

    def __init__(self):
        self._records: Dict[str, SessionRecord] = {}
        self._machines: Dict[str, ConnectionStateMachine] = {}
        self._listeners: List[RegistryListener] = []

    def create(
        self, host_config: HostConfig, label: Optional[str] = None
    ) -> SessionRecord:
        protocol = host_config.protocol
        prefix = (
            "file-browser"
            if protocol is not None and not protocol.is_terminal
            else "terminal"
        )
        record = SessionRecord(
            id=f"{prefix}-{uuid.uuid4()}",
            host_config=host_config,
            label=self._unique_label(label or host_config.display_name),
        )
        self._records[record.id] = record
        self._machines[record.id] = ConnectionStateMachine(record.connection_state)
        _LOGGER.debug("Created session %s (%s)", record.id, record.label)
        self._notify(record.id, record)
        return record

    def get(self, record_id: str) -> Optional[SessionRecord]:
        return self._records.get(record_id)

    def list(self) -> List[SessionRecord]:
        return list(self._records.values())

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def update_connection_state(
        self, record_id: str, **changes: Any
    ) -> Optional[SessionRecord]:
        """Update connection fields of a record.

        Keeps connection_error consistent with the state: entering FAILED
        without an error uses a generic message, and leaving FAILED clears it.

        Args:
            record_id: Record to update
            **changes: Any of connection_state, connection_logs,
                connection_error, session_id, file_session_id, just_connected

        Returns:
            Updated snapshot, or None if the record does not exist

        Raises:
            ValueError: If a field is not a connection field, or an error is
                given for a non-FAILED state
            InvalidStateTransitionError: If the state change is not allowed
        """
        self._check_fields(changes, CONNECTION_FIELDS)
        record = self._records.get(record_id)
        if record is None:
            _LOGGER.debug("Ignoring connection update for missing session %s", record_id)
            return None

        target = ConnectionState(changes.pop("connection_state", record.connection_state))
        machine = self._machines[record_id]
        if target != record.connection_state and not machine.can_move_to(target):
            raise InvalidStateTransitionError(
                record_id, record.connection_state.name, target.name
            )

        if target is ConnectionState.FAILED:
            error = changes.pop("connection_error", None) or record.connection_error
            changes["connection_error"] = error or ERROR_DEFAULT
        else:
            if changes.pop("connection_error", None) is not None:
                raise ValueError(
                    f"connection_error is only allowed in FAILED state, not {target.name}"
                )
            changes["connection_error"] = None

        if "connection_logs" in changes:
            changes["connection_logs"] = tuple(changes["connection_logs"] or ())

        if target != record.connection_state:
            machine.move_to(target)
        return self._store(replace(record, connection_state=target, **changes))

    def update_reconnect_state(
        self, record_id: str, **changes: Any
    ) -> Optional[SessionRecord]:
        """Update reconnect bookkeeping of a record.

        Args:
            record_id: Record to update
            **changes: Any of auto_reconnect_retry_count, is_reconnecting,
                reconnect_cancelled

        Returns:
            Updated snapshot, or None if the record does not exist
        """
        self._check_fields(changes, RECONNECT_FIELDS)
        record = self._records.get(record_id)
        if record is None:
            _LOGGER.debug("Ignoring reconnect update for missing session %s", record_id)
            return None
        return self._store(replace(record, **changes))

    def append_log(self, record_id: str, line: str) -> Optional[SessionRecord]:
        record = self._records.get(record_id)
        if record is None:
            return None
        return self._store(
            replace(record, connection_logs=record.connection_logs + (line,))
        )

    def cancel(self, record_id: str) -> Optional[SessionRecord]:
        return self.update_reconnect_state(
            record_id, reconnect_cancelled=True, is_reconnecting=False
        )

    def reset_reconnect_state(self, record_id: str) -> Optional[SessionRecord]:
        return self.update_reconnect_state(
            record_id,
            auto_reconnect_retry_count=0,
            is_reconnecting=False,
            reconnect_cancelled=False,
        )

    def remove(self, record_id: str) -> Optional[SessionRecord]:
        record = self._records.pop(record_id, None)
        self._machines.pop(record_id, None)
        if record is not None:
            _LOGGER.debug("Removed session %s", record_id)
            self._notify(record_id, None)
        return record

    def subscribe(self, listener: RegistryListener) -> Callable[[], None]:
        """Register a change listener.

        Args:
            listener: Called with (record_id, snapshot or None)

        Returns:
            Function that unsubscribes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _store(self, record: SessionRecord) -> SessionRecord:
        self._records[record.id] = record
        self._notify(record.id, record)
        return record

    def _notify(self, record_id: str, record: Optional[SessionRecord]) -> None:
        for listener in list(self._listeners):
            try:
                listener(record_id, record)
            except Exception as err:
                _LOGGER.error(
                    "Error in registry listener for %s: %s",
                    record_id,
                    err,
                    exc_info=True,
                )

    def _unique_label(self, base_label: str) -> str:
        taken = {record.label.lower() for record in self._records.values()}
        if base_label.lower() not in taken:
            return base_label
        index = 2
        while f"{base_label} ({index})".lower() in taken:
            index += 1
        return f"{base_label} ({index})"

    @staticmethod
    def _check_fields(changes: Dict[str, Any], allowed: frozenset) -> None:
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")
