"""Connection state machine for explicit state management."""

import logging
from enum import Enum, auto
from typing import Optional

from ...domain.value_objects.connection_state import ConnectionState

_LOGGER = logging.getLogger(__name__)


class ConnectionEvent(Enum):
    """Connection events that trigger state transitions."""

    CONNECT = auto()
    CONNECT_SUCCESS = auto()
    CONNECT_FAILED = auto()
    CONNECTION_LOST = auto()


class ConnectionStateMachine:
    """State machine for one session's connection cycle.

    Valid transitions:
        CONNECTING -> CONNECTED (on CONNECT_SUCCESS)
        CONNECTING -> FAILED (on CONNECT_FAILED)
        FAILED -> CONNECTING (on CONNECT, new cycle)
        CONNECTED -> FAILED (on CONNECTION_LOST)
        CONNECTED -> CONNECTING (on CONNECT, reconnecting a live session)

    Example:
        >>> sm = ConnectionStateMachine()
        >>> sm.transition(ConnectionEvent.CONNECT_SUCCESS)
        True
        >>> sm.state
        <ConnectionState.CONNECTED: 'CONNECTED'>
        >>> sm.transition(ConnectionEvent.CONNECT_SUCCESS)
        False
    """

    _TRANSITIONS = {
        (
            ConnectionState.CONNECTING,
            ConnectionEvent.CONNECT_SUCCESS,
        ): ConnectionState.CONNECTED,
        (
            ConnectionState.CONNECTING,
            ConnectionEvent.CONNECT_FAILED,
        ): ConnectionState.FAILED,
        (ConnectionState.FAILED, ConnectionEvent.CONNECT): ConnectionState.CONNECTING,
        (
            ConnectionState.CONNECTED,
            ConnectionEvent.CONNECTION_LOST,
        ): ConnectionState.FAILED,
        (
            ConnectionState.CONNECTED,
            ConnectionEvent.CONNECT,
        ): ConnectionState.CONNECTING,
    }

    def __init__(self, initial: ConnectionState = ConnectionState.CONNECTING):
        """Initialize state machine.

        Args:
            initial: Starting state; new sessions start CONNECTING
        """
        self._state = initial

    @property
    def state(self) -> ConnectionState:
        """Get current state."""
        return self._state

    def event_for(self, target: ConnectionState) -> Optional[ConnectionEvent]:
        """Find the event that moves the machine to a target state.

        Args:
            target: Desired state

        Returns:
            Event leading from the current state to target, or None if the
            transition is not allowed
        """
        for (state, event), new_state in self._TRANSITIONS.items():
            if state == self._state and new_state == target:
                return event
        return None

    def can_move_to(self, target: ConnectionState) -> bool:
        return self.event_for(target) is not None

    def transition(self, event: ConnectionEvent) -> bool:
        """Attempt state transition.

        Args:
            event: Event triggering transition

        Returns:
            True if transition valid and executed, False otherwise
        """
        key = (self._state, event)

        if key not in self._TRANSITIONS:
            _LOGGER.debug(
                "Invalid transition: %s + %s",
                self._state.name,
                event.name,
            )
            return False

        self._change_state(self._TRANSITIONS[key], event)
        return True

    def move_to(self, target: ConnectionState) -> bool:
        """Transition to a target state via whichever event allows it."""
        event = self.event_for(target)
        if event is None:
            _LOGGER.debug(
                "No transition from %s to %s", self._state.name, target.name
            )
            return False
        return self.transition(event)

    def _change_state(self, new_state: ConnectionState, event: ConnectionEvent):
        previous, self._state = self._state, new_state
        _LOGGER.debug(
            "Connection state: %s -> %s (event: %s)",
            previous.name,
            new_state.name,
            event.name,
        )

    def __repr__(self) -> str:
        return f"ConnectionStateMachine(state={self._state!r})"
