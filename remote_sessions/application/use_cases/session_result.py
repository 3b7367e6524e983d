"""Session Result DTO.

Data Transfer Object returned by the session use cases.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class SessionResult:
    """Result of opening, retrying or closing a session.

    Attributes:
        tab_id: Registry id of the session
        success: Whether the operation succeeded
        error: Error message if failed
        session_id: Backend session handle when connected
        file_session_id: Backend file session handle when connected
        logs: Connection log lines of the cycle
    """

    tab_id: str
    success: bool
    error: str = ""
    session_id: Optional[str] = None
    file_session_id: Optional[str] = None
    logs: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def failed(cls, tab_id: str, error: str) -> "SessionResult":
        return cls(tab_id=tab_id, success=False, error=error)
