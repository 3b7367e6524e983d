"""IProtocolBackend interface for wire-level session backends."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.host_config import HostConfig
from .i_connection_handler import LogCallback


class IProtocolBackend(ABC):
    """Interface for the component that speaks a wire protocol.

    Backends own session handles. A terminal backend opens shells (SSH,
    Telnet); a file backend opens file-transfer sessions (SFTP, FTP, FTPS).
    Handlers adapt backends to the engine's contract.

    Example:
        >>> session_id = await backend.open(host, on_log=print)
        >>> await backend.ping(session_id)
        >>> await backend.close(session_id)
    """

    @abstractmethod
    async def open(
        self, host_config: HostConfig, on_log: Optional[LogCallback] = None
    ) -> str:
        """Open a session and return its handle.

        Raises:
            RemoteConnectionError: If the remote end refuses or is unreachable
        """

    @abstractmethod
    async def close(self, session_id: str) -> None:
        """Close a session. Closing an unknown session is a no-op."""

    @abstractmethod
    async def ping(self, session_id: str) -> None:
        """Round-trip a keepalive on an open session.

        Raises:
            RemoteConnectionError: If the session is gone or not answering
        """
