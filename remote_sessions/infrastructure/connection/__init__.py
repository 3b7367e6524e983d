"""Connection factory and protocol handlers."""

from .factory import ConnectionFactory
from .handlers import (
    BaseConnectionHandler,
    FTPConnectionHandler,
    FTPSConnectionHandler,
    SFTPConnectionHandler,
    SSHConnectionHandler,
    TelnetConnectionHandler,
)

__all__ = [
    "ConnectionFactory",
    "BaseConnectionHandler",
    "FTPConnectionHandler",
    "FTPSConnectionHandler",
    "SFTPConnectionHandler",
    "SSHConnectionHandler",
    "TelnetConnectionHandler",
]
