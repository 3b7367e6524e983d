"""CloseSessionUseCase: close a tab and release its backend sessions."""

import logging

from ...domain.interfaces import ISessionRegistry
from ...infrastructure.connection.factory import ConnectionFactory
from ...infrastructure.decorators import require_session
from ..services.auto_reconnect_service import AutoReconnectService
from ..services.heartbeat_service import ConnectionHeartbeatService
from .session_result import SessionResult

_LOGGER = logging.getLogger(__name__)


class CloseSessionUseCase:
    """Use case for closing a session.

    The record is removed before the backend is closed, so an in-flight
    reconnect loop sees the session gone and stops without touching it.
    """

    def __init__(
        self,
        registry: ISessionRegistry,
        factory: ConnectionFactory,
        reconnect_service: AutoReconnectService,
        heartbeat_service: ConnectionHeartbeatService,
    ):
        self._registry = registry
        self._factory = factory
        self._reconnect = reconnect_service
        self._heartbeat = heartbeat_service

    @require_session(id_param="tab_id", on_missing=SessionResult.failed)
    async def execute(self, tab_id: str) -> SessionResult:
        """Close a session.

        Args:
            tab_id: Session to close

        Returns:
            SessionResult carrying the released backend handles
        """
        if self._reconnect.is_reconnecting(tab_id):
            self._reconnect.cancel_reconnect(tab_id)
        self._heartbeat.stop(tab_id)

        record = self._registry.remove(tab_id)
        handler = self._factory.get_handler(record.host_config.connection_type)
        if handler is not None and record.session_id:
            await handler.close(record.session_id)

        _LOGGER.info("Closed session %s", tab_id)
        return SessionResult(
            tab_id=tab_id,
            success=True,
            session_id=record.session_id,
            file_session_id=record.file_session_id,
        )
