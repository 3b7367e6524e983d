"""Connection factory.

Resolves a host's protocol to the handler that serves it.
"""

import logging
from typing import Dict, List, Optional, Union

from ...domain.exceptions import HandlerNotFoundError
from ...domain.interfaces import IConnectionHandler, IProtocolBackend
from ...domain.value_objects.protocol_type import ProtocolType
from .handlers import (
    FTPConnectionHandler,
    FTPSConnectionHandler,
    SFTPConnectionHandler,
    SSHConnectionHandler,
    TelnetConnectionHandler,
)

_LOGGER = logging.getLogger(__name__)


class ConnectionFactory:
    """Maps each ProtocolType to exactly one handler.

    Registering a handler for a protocol that already has one replaces it.

    Example:
        >>> factory = ConnectionFactory.from_backends(terminal, files)
        >>> factory.get_handler("ftps")
        FTPSConnectionHandler(protocol=ftps)
        >>> factory.get_handler("rdp") is None
        True
    """

    def __init__(self, handlers: Optional[List[IConnectionHandler]] = None):
        self._handlers: Dict[ProtocolType, IConnectionHandler] = {}
        for handler in handlers or []:
            self.register(handler)

    @classmethod
    def from_backends(
        cls,
        terminal_backend: IProtocolBackend,
        file_backend: IProtocolBackend,
        telnet_backend: Optional[IProtocolBackend] = None,
    ) -> "ConnectionFactory":
        """Build a factory with all five protocol handlers.

        Args:
            terminal_backend: Backend for SSH shells (and SFTP's shell)
            file_backend: Backend for SFTP/FTP/FTPS file sessions
            telnet_backend: Backend for Telnet; defaults to terminal_backend

        Returns:
            Factory with SSH, SFTP, FTP, FTPS and Telnet handlers
        """
        return cls(
            [
                SSHConnectionHandler(terminal_backend),
                SFTPConnectionHandler(terminal_backend, file_backend),
                FTPConnectionHandler(file_backend),
                FTPSConnectionHandler(file_backend),
                TelnetConnectionHandler(telnet_backend or terminal_backend),
            ]
        )

    def register(self, handler: IConnectionHandler) -> None:
        """Register a handler for its protocol."""
        if handler.protocol in self._handlers:
            _LOGGER.debug("Replacing handler for %s", handler.protocol.value)
        self._handlers[handler.protocol] = handler

    def get_handler(
        self, connection_type: Union[str, ProtocolType, None]
    ) -> Optional[IConnectionHandler]:
        """Get handler for a connection type.

        Args:
            connection_type: Protocol name or ProtocolType

        Returns:
            Matching handler, or None for unknown or unregistered protocols
        """
        protocol = ProtocolType.parse(connection_type)
        if protocol is None:
            return None
        return self._handlers.get(protocol)

    def require_handler(
        self, connection_type: Union[str, ProtocolType, None]
    ) -> IConnectionHandler:
        """Like get_handler, but raises for a missing handler.

        Raises:
            HandlerNotFoundError: If no handler serves the connection type
        """
        handler = self.get_handler(connection_type)
        if handler is None:
            raise HandlerNotFoundError(str(connection_type))
        return handler

    @property
    def protocols(self) -> List[ProtocolType]:
        return list(self._handlers)
