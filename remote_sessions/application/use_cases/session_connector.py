"""SessionConnector: one interactive connect cycle for a session.

Shared by opening a new session and retrying a failed one. Unlike the
reconnect loop there is a single attempt and no backoff.
"""

import logging
from typing import Set

from ...const import ERROR_DEFAULT
from ...domain.entities.host_config import HostConfig
from ...domain.exceptions import RemoteConnectionError
from ...domain.interfaces import (
    IConnectionHandler,
    ISessionRegistry,
    ISettingsProvider,
)
from ...domain.value_objects.connection_state import ConnectionState
from ..services.auto_reconnect_service import AutoReconnectService
from ..services.heartbeat_service import ConnectionHeartbeatService
from .session_result import SessionResult

_LOGGER = logging.getLogger(__name__)


class SessionConnector:
    """Runs a connect call and publishes its outcome to the registry.

    On success the record becomes CONNECTED with the new handles, the
    just-connected indicator is raised and the heartbeat starts. On failure
    the record becomes FAILED with the handler's message. Log lines stream
    into the record while connecting.

    Cycles in flight are tracked per tab so callers can refuse to start a
    second one (see ``is_connecting``).
    """

    def __init__(
        self,
        registry: ISessionRegistry,
        settings_provider: ISettingsProvider,
        reconnect_service: AutoReconnectService,
        heartbeat_service: ConnectionHeartbeatService,
    ):
        self._registry = registry
        self._settings = settings_provider
        self._reconnect = reconnect_service
        self._heartbeat = heartbeat_service
        self._connecting: Set[str] = set()

    def is_connecting(self, tab_id: str) -> bool:
        return tab_id in self._connecting

    async def run(
        self,
        tab_id: str,
        host_config: HostConfig,
        handler: IConnectionHandler,
        retry: bool = False,
    ) -> SessionResult:
        """Connect once and publish the result.

        Args:
            tab_id: Record to update
            host_config: Host to connect to
            handler: Protocol handler for the host
            retry: Use the handler's retry path instead of connect

        Returns:
            SessionResult describing the cycle
        """
        connect = handler.retry if retry else handler.connect
        self._connecting.add(tab_id)
        try:
            result = await connect(
                host_config, lambda line: self._registry.append_log(tab_id, line)
            )
        except RemoteConnectionError as err:
            _LOGGER.warning("Connecting %s failed: %s", tab_id, err.message)
            return self._publish_failure(tab_id, err.message or ERROR_DEFAULT)
        finally:
            self._connecting.discard(tab_id)

        record = self._registry.get(tab_id)
        if record is None:
            _LOGGER.info("Session %s closed while connecting", tab_id)
            await handler.close(result.session_id)
            return SessionResult.failed(tab_id, f"Session not found: {tab_id}")

        record = self._registry.update_connection_state(
            tab_id,
            connection_state=ConnectionState.CONNECTED,
            session_id=result.session_id,
            file_session_id=result.file_session_id,
        )
        self._registry.reset_reconnect_state(tab_id)
        self._reconnect.flag_just_connected(tab_id)
        if self._settings.get_heartbeat_settings().enabled:
            self._heartbeat.start(tab_id)

        _LOGGER.info("Connected %s to %s", tab_id, host_config.display_name)
        return SessionResult(
            tab_id=tab_id,
            success=True,
            session_id=result.session_id,
            file_session_id=result.file_session_id,
            logs=record.connection_logs,
        )

    def _publish_failure(self, tab_id: str, error: str) -> SessionResult:
        record = self._registry.update_connection_state(
            tab_id, connection_state=ConnectionState.FAILED, connection_error=error
        )
        if record is None:
            return SessionResult.failed(tab_id, error)
        return SessionResult(
            tab_id=tab_id, success=False, error=error, logs=record.connection_logs
        )
