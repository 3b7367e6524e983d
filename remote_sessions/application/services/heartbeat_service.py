"""ConnectionHeartbeatService: detects dead sessions and hands them over.

Pings every monitored session on an interval. After ``max_failures``
consecutive misses the session is marked FAILED and the auto-reconnect
loop takes over; when it succeeds, monitoring resumes on the new session.
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional, Set

from ...const import ERROR_HEARTBEAT_LOST, LOG_HEARTBEAT_DEAD
from ...domain.interfaces import ISessionRegistry, ISettingsProvider
from ...domain.value_objects.connection_state import ConnectionState
from ...infrastructure.connection.factory import ConnectionFactory
from .auto_reconnect_service import AutoReconnectService
from .heartbeat_state import HeartbeatState

_LOGGER = logging.getLogger(__name__)


class ConnectionHeartbeatService:
    """Periodic liveness checks for connected sessions.

    Example:
        >>> heartbeat = ConnectionHeartbeatService(registry, factory, settings, reconnect)
        >>> heartbeat.start(tab_id)
        >>> heartbeat.is_running(tab_id)
        True
    """

    def __init__(
        self,
        registry: ISessionRegistry,
        factory: ConnectionFactory,
        settings_provider: ISettingsProvider,
        reconnect_service: AutoReconnectService,
    ):
        self._registry = registry
        self._factory = factory
        self._settings = settings_provider
        self._reconnect = reconnect_service
        self._states: Dict[str, HeartbeatState] = {}
        self._recovering: Set[asyncio.Task] = set()

    def start(
        self,
        record_id: str,
        session_id: Optional[str] = None,
        interval: Optional[int] = None,
        timeout: Optional[int] = None,
        max_failures: Optional[int] = None,
    ) -> bool:
        """Start monitoring a session.

        Any previous monitor for the same tab is replaced. Values not given
        come from the heartbeat settings.

        Args:
            record_id: Tab id of the session
            session_id: Backend session to ping (defaults to the record's)
            interval: Delay between pings in milliseconds
            timeout: Ping timeout in milliseconds
            max_failures: Consecutive misses before the session is dead

        Returns:
            True if monitoring started
        """
        record = self._registry.get(record_id)
        session_id = session_id or (record.session_id if record else None)
        if record is None or not session_id:
            _LOGGER.debug("Not starting heartbeat for %s: no live session", record_id)
            return False

        self.stop(record_id)
        settings = self._settings.get_heartbeat_settings()
        state = HeartbeatState(
            record_id=record_id,
            session_id=session_id,
            interval=interval or settings.interval,
            timeout=timeout or settings.timeout,
            max_failures=max_failures or settings.max_failures,
        )
        state.task = asyncio.get_running_loop().create_task(self._run(state))
        self._states[record_id] = state
        _LOGGER.debug(
            "Started heartbeat for %s (interval %dms, timeout %dms, max failures %d)",
            record_id,
            state.interval,
            state.timeout,
            state.max_failures,
        )
        return True

    def stop(self, record_id: str) -> None:
        """Stop monitoring a session."""
        state = self._states.pop(record_id, None)
        if state is None:
            return
        state.is_running = False
        if state.task is not None and state.task is not asyncio.current_task():
            state.task.cancel()
        _LOGGER.debug("Stopped heartbeat for %s", record_id)

    def stop_all(self) -> None:
        for record_id in list(self._states):
            self.stop(record_id)

    def is_running(self, record_id: str) -> bool:
        state = self._states.get(record_id)
        return state is not None and state.is_running

    def get_state(self, record_id: str) -> Optional[HeartbeatState]:
        return self._states.get(record_id)

    @property
    def monitored_sessions(self) -> List[str]:
        return list(self._states)

    async def shutdown(self) -> None:
        """Stop every monitor and wait for the ping tasks to finish."""
        tasks = [state.task for state in self._states.values() if state.task]
        tasks.extend(self._recovering)
        self.stop_all()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, state: HeartbeatState) -> None:
        while state.is_running:
            await asyncio.sleep(state.interval / 1000)
            if not state.is_running:
                return

            if await self._ping(state):
                continue

            if state.consecutive_failures >= state.max_failures:
                _LOGGER.error(
                    "Heartbeat for %s missed %d times, connection appears dead",
                    state.record_id,
                    state.consecutive_failures,
                )
                self.stop(state.record_id)
                await self._handle_connection_dead(state)
                return

    async def _ping(self, state: HeartbeatState) -> bool:
        record = self._registry.get(state.record_id)
        if record is None:
            self.stop(state.record_id)
            return True

        handler = self._factory.get_handler(record.host_config.connection_type)
        if handler is None:
            self.stop(state.record_id)
            return True

        state.last_ping_time = time.monotonic()
        try:
            await asyncio.wait_for(handler.ping(state.session_id), state.timeout / 1000)
        except Exception as err:  # any ping failure counts as a miss
            state.consecutive_failures += 1
            _LOGGER.warning(
                "Heartbeat for %s failed (%d/%d): %s",
                state.record_id,
                state.consecutive_failures,
                state.max_failures,
                str(err) or type(err).__name__,
            )
            return False

        state.last_pong_time = time.monotonic()
        state.consecutive_failures = 0
        return True

    async def _handle_connection_dead(self, state: HeartbeatState) -> None:
        record = self._registry.get(state.record_id)
        if record is None:
            return

        task = asyncio.current_task()
        self._recovering.add(task)
        try:
            self._registry.append_log(state.record_id, LOG_HEARTBEAT_DEAD)
            self._registry.update_connection_state(
                state.record_id,
                connection_state=ConnectionState.FAILED,
                connection_error=ERROR_HEARTBEAT_LOST,
            )
            handler = self._factory.get_handler(record.host_config.connection_type)
            if handler is not None:
                await handler.close(state.session_id)

            if await self._reconnect.attempt_reconnect(state.record_id):
                self.start(state.record_id)
        finally:
            self._recovering.discard(task)
