"""ProtocolType value object.

Closed set of wire protocols a session can use.
"""

from enum import Enum
from typing import Optional, Union


class ProtocolType(Enum):
    """Supported remote protocols.

    Each value maps to exactly one connection handler implementation.
    """

    SSH = "ssh"
    SFTP = "sftp"
    FTP = "ftp"
    FTPS = "ftps"
    TELNET = "telnet"

    @property
    def is_terminal(self) -> bool:
        """Check if the protocol opens an interactive terminal.

        Example:
            >>> ProtocolType.SSH.is_terminal
            True
            >>> ProtocolType.FTP.is_terminal
            False
        """
        return self in (ProtocolType.SSH, ProtocolType.SFTP, ProtocolType.TELNET)

    @property
    def is_file_transfer(self) -> bool:
        """Check if the protocol exposes a remote file session."""
        return self in (ProtocolType.SFTP, ProtocolType.FTP, ProtocolType.FTPS)

    @classmethod
    def parse(cls, value: Union[str, "ProtocolType", None]) -> Optional["ProtocolType"]:
        """Resolve a protocol name to a ProtocolType.

        Args:
            value: Protocol name (case-insensitive), ProtocolType, or None

        Returns:
            Matching ProtocolType, or None if the name is unknown

        Example:
            >>> ProtocolType.parse("SFTP")
            <ProtocolType.SFTP: 'sftp'>
            >>> ProtocolType.parse("rdp") is None
            True
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None
