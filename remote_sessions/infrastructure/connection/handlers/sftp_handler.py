"""SFTP connection handler."""

import logging
from typing import Dict

from ....domain.entities.connect_result import ConnectResult
from ....domain.entities.host_config import HostConfig
from ....domain.interfaces import IProtocolBackend, LogCallback
from ....domain.value_objects.protocol_type import ProtocolType
from ...decorators import handle_connection_errors
from .base import BaseConnectionHandler

_LOGGER = logging.getLogger(__name__)


class SFTPConnectionHandler(BaseConnectionHandler):
    """Handles SFTP connections: an SSH terminal plus a remote file session.

    Both sessions are opened on connect. If the file session cannot be opened
    the terminal session is closed again so no half-open pair is left behind.

    Attributes:
        _file_backend: Backend that owns the file session
        _file_sessions: Terminal session id -> file session id
    """

    def __init__(self, backend: IProtocolBackend, file_backend: IProtocolBackend):
        super().__init__(backend)
        self._file_backend = file_backend
        self._file_sessions: Dict[str, str] = {}

    @property
    def protocol(self) -> ProtocolType:
        return ProtocolType.SFTP

    async def _open(self, host_config: HostConfig, on_log: LogCallback) -> ConnectResult:
        session_id = await self._backend.open(host_config, on_log)
        try:
            file_session_id = await self._file_backend.open(host_config, on_log)
        except BaseException:
            await self._backend.close(session_id)
            raise

        self._file_sessions[session_id] = file_session_id
        return ConnectResult(session_id=session_id, file_session_id=file_session_id)

    @handle_connection_errors("Close SFTP session", reraise=False)
    async def close(self, session_id: str) -> None:
        if not session_id:
            return
        file_session_id = self._file_sessions.pop(session_id, None)
        try:
            await self._backend.close(session_id)
        finally:
            if file_session_id is not None:
                await self._file_backend.close(file_session_id)
