"""FTPS connection handler."""

from ....domain.entities.host_config import HostConfig
from ....domain.value_objects.protocol_type import ProtocolType
from .ftp_handler import FTPConnectionHandler


class FTPSConnectionHandler(FTPConnectionHandler):
    """Handles FTP over TLS connections.

    Same file backend as FTP, with ``tls`` forced on in the backend options.
    """

    @property
    def protocol(self) -> ProtocolType:
        return ProtocolType.FTPS

    def _prepare(self, host_config: HostConfig) -> HostConfig:
        return host_config.with_options(tls=True)
