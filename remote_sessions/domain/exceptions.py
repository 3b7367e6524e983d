"""Custom exceptions for the remote session engine.

This module defines domain-specific exceptions that represent expected
error conditions while connecting remote sessions. Cancellation, total-time
timeouts and exhausted retries are not exceptions: the reconnect loop reports
them as a ReconnectOutcome.
"""

from typing import Iterable, Optional


class SessionEngineError(Exception):
    """Base class for all errors raised by the session engine."""


class RemoteConnectionError(SessionEngineError):
    """Protocol handler failed to establish a session.

    Carries a human-readable message plus any log lines the backend produced
    before failing, so callers can show the user what happened.

    This exception should be logged without a stack trace since it represents
    an expected network condition, not a bug.

    Example:
        >>> raise RemoteConnectionError(
        ...     "Authentication failed", logs=["Connecting to host:22"]
        ... )
    """

    def __init__(self, message: str, logs: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.message = message
        self.logs = tuple(logs or ())


class HandlerNotFoundError(SessionEngineError):
    """No connection handler is registered for a protocol type.

    This condition is non-retryable.
    """

    def __init__(self, protocol: str):
        super().__init__(f"No handler found for connection type: {protocol}")
        self.protocol = protocol


class InvalidStateTransitionError(SessionEngineError, ValueError):
    """Registry update would move a session through an illegal transition."""

    def __init__(self, session_id: str, current: str, target: str):
        super().__init__(
            f"Invalid connection state transition for {session_id}: "
            f"{current} -> {target}"
        )
        self.session_id = session_id
        self.current = current
        self.target = target


class SessionNotFoundError(SessionEngineError, KeyError):
    """A session record required by an operation does not exist."""

    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session not found: {self.session_id}"


class SettingsError(SessionEngineError, ValueError):
    """Settings file is unreadable or fails schema validation."""
