"""State machines for managing complex state transitions."""

from .connection_state_machine import (
    ConnectionStateMachine,
    ConnectionEvent,
)

__all__ = [
    "ConnectionStateMachine",
    "ConnectionEvent",
]
