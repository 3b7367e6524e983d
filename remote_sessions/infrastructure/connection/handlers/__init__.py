"""Protocol connection handlers, one per ProtocolType."""

from .base import BaseConnectionHandler
from .ftp_handler import FTPConnectionHandler
from .ftps_handler import FTPSConnectionHandler
from .sftp_handler import SFTPConnectionHandler
from .ssh_handler import SSHConnectionHandler
from .telnet_handler import TelnetConnectionHandler

__all__ = [
    "BaseConnectionHandler",
    "FTPConnectionHandler",
    "FTPSConnectionHandler",
    "SFTPConnectionHandler",
    "SSHConnectionHandler",
    "TelnetConnectionHandler",
]
