"""ReconnectOutcome value object.

Terminal result of one auto-reconnect loop.
"""

from enum import Enum


class ReconnectOutcome(Enum):
    """Why a reconnect loop stopped."""

    CONNECTED = "connected"
    ALREADY_RUNNING = "already_running"  # another loop owns this session
    DISABLED = "disabled"
    SESSION_NOT_FOUND = "session_not_found"
    CANCELLED = "cancelled"
    HANDLER_NOT_FOUND = "handler_not_found"
    TIMED_OUT = "timed_out"  # max_total_time elapsed
    RETRIES_EXHAUSTED = "retries_exhausted"

    @property
    def success(self) -> bool:
        """Check if the loop ended with a live session."""
        return self is ReconnectOutcome.CONNECTED
