"""ConnectResult entity.

Extracted from the handler interface for one-class-per-file compliance.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ConnectResult:
    """Handles returned by a successful connect.

    The protocol backend owns both sessions; records only reference them.

    Attributes:
        session_id: Terminal or transfer session handle
        file_session_id: Remote file session handle, for protocols with one
        logs: Log lines produced while connecting
    """

    session_id: str
    file_session_id: Optional[str] = None
    logs: Tuple[str, ...] = ()
