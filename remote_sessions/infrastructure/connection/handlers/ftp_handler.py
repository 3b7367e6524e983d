"""FTP connection handler."""

from ....domain.entities.connect_result import ConnectResult
from ....domain.entities.host_config import HostConfig
from ....domain.interfaces import LogCallback
from ....domain.value_objects.protocol_type import ProtocolType
from .base import BaseConnectionHandler


class FTPConnectionHandler(BaseConnectionHandler):
    """Handles FTP file browser connections.

    There is no terminal for FTP, so the file session is both the session
    handle and the file session handle.
    """

    @property
    def protocol(self) -> ProtocolType:
        return ProtocolType.FTP

    async def _open(self, host_config: HostConfig, on_log: LogCallback) -> ConnectResult:
        session_id = await self._backend.open(self._prepare(host_config), on_log)
        return ConnectResult(session_id=session_id, file_session_id=session_id)

    def _prepare(self, host_config: HostConfig) -> HostConfig:
        return host_config
