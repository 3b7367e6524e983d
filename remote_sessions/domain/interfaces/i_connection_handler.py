"""IConnectionHandler interface for protocol connectors.

Extracted from the factory for one-class-per-file compliance.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..entities.connect_result import ConnectResult
from ..entities.host_config import HostConfig
from ..value_objects.protocol_type import ProtocolType

LogCallback = Callable[[str], None]


class IConnectionHandler(ABC):
    """Interface for protocol-specific connection handlers.

    A handler turns a HostConfig into a live backend session. The engine only
    sees this capability set; the actual wire clients sit behind it.

    Connection lifecycle:
        1. connect(host, on_log) → ConnectResult
        2. ping(session_id) (optional liveness check, used by heartbeats)
        3. close(session_id) → releases backend resources

    Example:
        >>> handler = factory.get_handler("ssh")
        >>> result = await handler.connect(host, on_log=print)
        >>> await handler.close(result.session_id)
    """

    @property
    @abstractmethod
    def protocol(self) -> ProtocolType:
        """Protocol served by this handler."""

    def can_handle(self, connection_type: str) -> bool:
        """Check if this handler serves a protocol name."""
        return ProtocolType.parse(connection_type) is self.protocol

    @abstractmethod
    async def connect(
        self, host_config: HostConfig, on_log: Optional[LogCallback] = None
    ) -> ConnectResult:
        """Open a session to the host.

        Args:
            host_config: Host to connect to
            on_log: Called with each progress line, in order

        Returns:
            ConnectResult with the backend session handles

        Raises:
            RemoteConnectionError: If the session could not be established
        """

    async def retry(
        self, host_config: HostConfig, on_log: Optional[LogCallback] = None
    ) -> ConnectResult:
        """Retry a connection. Defaults to a fresh connect."""
        return await self.connect(host_config, on_log)

    @abstractmethod
    async def close(self, session_id: str) -> None:
        """Release backend resources for a session.

        Must be safe to call for a session that already terminated.
        """

    @abstractmethod
    async def ping(self, session_id: str) -> None:
        """Check that a session is alive.

        Raises:
            RemoteConnectionError: If the session does not answer
        """
