"""OpenSessionUseCase: open a new tab and connect it.

1. Create the record (CONNECTING) with a unique label
2. Resolve the protocol handler; a missing one fails the record right away
3. Connect once, streaming log lines into the record
4. Publish CONNECTED (and start the heartbeat) or FAILED
"""

import logging
from typing import Optional

from ...const import ERROR_NO_HANDLER
from ...domain.entities.host_config import HostConfig
from ...domain.interfaces import ISessionRegistry
from ...domain.value_objects.connection_state import ConnectionState
from ...infrastructure.connection.factory import ConnectionFactory
from .session_connector import SessionConnector
from .session_result import SessionResult

_LOGGER = logging.getLogger(__name__)


class OpenSessionUseCase:
    """Use case for opening a session in a new tab.

    Initial connect failures are not retried automatically; the record
    stays FAILED until the user retries it.

    Example:
        >>> result = await open_session.execute(HostConfig(host="example.org"))
        >>> if result.success:
        ...     print(f"Tab {result.tab_id} connected as {result.session_id}")
    """

    def __init__(
        self,
        registry: ISessionRegistry,
        factory: ConnectionFactory,
        connector: SessionConnector,
    ):
        self._registry = registry
        self._factory = factory
        self._connector = connector

    async def execute(
        self, host_config: HostConfig, label: Optional[str] = None
    ) -> SessionResult:
        """Open a session.

        Args:
            host_config: Host to connect to
            label: Tab label (defaults to the host's display name)

        Returns:
            SessionResult with the new tab id
        """
        record = self._registry.create(host_config, label)
        _LOGGER.info(
            "Opening %s session %s to %s",
            host_config.connection_type,
            record.id,
            host_config.display_name,
        )

        handler = self._factory.get_handler(host_config.connection_type)
        if handler is None:
            error = ERROR_NO_HANDLER.format(protocol=host_config.connection_type)
            _LOGGER.error(error)
            self._registry.update_connection_state(
                record.id, connection_state=ConnectionState.FAILED, connection_error=error
            )
            return SessionResult.failed(record.id, error)

        return await self._connector.run(record.id, host_config, handler)
