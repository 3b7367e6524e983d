"""Base connection handler backed by a protocol backend."""

import logging
from typing import List, Optional

from ....domain.entities.connect_result import ConnectResult
from ....domain.entities.host_config import HostConfig
from ....domain.exceptions import RemoteConnectionError
from ....domain.interfaces import IConnectionHandler, IProtocolBackend, LogCallback
from ...decorators import handle_connection_errors

_LOGGER = logging.getLogger(__name__)


class BaseConnectionHandler(IConnectionHandler):
    """Handler that delegates wire work to an IProtocolBackend.

    Subclasses set the protocol and may override ``_open`` when a protocol
    needs more than one backend session (SFTP) or extra options (FTPS).

    Any non-RemoteConnectionError raised by a backend while connecting is
    wrapped into RemoteConnectionError, carrying the log lines collected so
    far, so the engine sees a single failure type.
    """

    def __init__(self, backend: IProtocolBackend):
        self._backend = backend

    @property
    def backend(self) -> IProtocolBackend:
        return self._backend

    async def connect(
        self, host_config: HostConfig, on_log: Optional[LogCallback] = None
    ) -> ConnectResult:
        logs: List[str] = []

        def collect(line: str) -> None:
            logs.append(line)
            if on_log is not None:
                on_log(line)

        _LOGGER.debug(
            "Connecting %s to %s:%s",
            self.protocol.value,
            host_config.host,
            host_config.effective_port,
        )
        try:
            result = await self._open(host_config, collect)
        except RemoteConnectionError as err:
            if err.logs:
                raise
            raise RemoteConnectionError(err.message, logs) from err
        except Exception as err:
            raise RemoteConnectionError(str(err) or type(err).__name__, logs) from err

        return ConnectResult(
            session_id=result.session_id,
            file_session_id=result.file_session_id,
            logs=tuple(logs),
        )

    async def _open(self, host_config: HostConfig, on_log: LogCallback) -> ConnectResult:
        session_id = await self._backend.open(host_config, on_log)
        return ConnectResult(session_id=session_id)

    @handle_connection_errors("Close session", reraise=False)
    async def close(self, session_id: str) -> None:
        if not session_id:
            return
        await self._backend.close(session_id)

    async def ping(self, session_id: str) -> None:
        await self._backend.ping(session_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(protocol={self.protocol.value})"
