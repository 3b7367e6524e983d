"""RetrySessionUseCase: manual retry of a session from the UI."""

import logging

from ...const import ERROR_NO_HANDLER
from ...domain.interfaces import ISessionRegistry
from ...domain.value_objects.connection_state import ConnectionState
from ...infrastructure.connection.factory import ConnectionFactory
from ...infrastructure.decorators import require_session
from ..services.auto_reconnect_service import AutoReconnectService
from ..services.heartbeat_service import ConnectionHeartbeatService
from .session_connector import SessionConnector
from .session_result import SessionResult

_LOGGER = logging.getLogger(__name__)


class RetrySessionUseCase:
    """Use case for retrying a session by hand.

    Starts a fresh cycle: the reconnect bookkeeping is reset (clearing a
    previous cancellation), the log starts over and a single connect is
    made through the handler's retry path. A live backend session is
    closed first.

    Refused while the auto-reconnect loop owns the session or another
    connect cycle for it is still running.
    """

    def __init__(
        self,
        registry: ISessionRegistry,
        factory: ConnectionFactory,
        reconnect_service: AutoReconnectService,
        heartbeat_service: ConnectionHeartbeatService,
        connector: SessionConnector,
    ):
        self._registry = registry
        self._factory = factory
        self._reconnect = reconnect_service
        self._heartbeat = heartbeat_service
        self._connector = connector

    @require_session(id_param="tab_id", on_missing=SessionResult.failed)
    async def execute(self, tab_id: str) -> SessionResult:
        """Retry connecting a session.

        Args:
            tab_id: Session to retry

        Returns:
            SessionResult of the new cycle
        """
        if self._reconnect.is_reconnecting(tab_id):
            _LOGGER.warning("Not retrying %s: reconnect in progress", tab_id)
            return SessionResult.failed(tab_id, "Reconnect already in progress")
        if self._connector.is_connecting(tab_id):
            _LOGGER.warning("Not retrying %s: connect in progress", tab_id)
            return SessionResult.failed(tab_id, "Connect already in progress")

        record = self._registry.get(tab_id)
        host_config = record.host_config
        handler = self._factory.get_handler(host_config.connection_type)
        if handler is None:
            error = ERROR_NO_HANDLER.format(protocol=host_config.connection_type)
            _LOGGER.error(error)
            self._registry.update_connection_state(
                tab_id, connection_state=ConnectionState.FAILED, connection_error=error
            )
            return SessionResult.failed(tab_id, error)

        self._heartbeat.stop(tab_id)
        if record.session_id:
            await handler.close(record.session_id)
            # Another retry may have started while the old session was closing
            if self._connector.is_connecting(tab_id):
                return SessionResult.failed(tab_id, "Connect already in progress")

        self._registry.reset_reconnect_state(tab_id)
        self._registry.update_connection_state(
            tab_id,
            connection_state=ConnectionState.CONNECTING,
            connection_logs=[f"Retrying connection to {host_config.display_name}..."],
            session_id=None,
            file_session_id=None,
        )
        _LOGGER.info("Retrying %s", tab_id)
        return await self._connector.run(tab_id, host_config, handler, retry=True)
