"""AutoReconnectService: the reconnect loop for failed sessions.

Drives a FAILED session back to CONNECTED with bounded, exponentially
backed-off attempts:
1. Check settings, record, cancellation and handler (no mutation on refusal)
2. Per attempt: check the total time limit and cancellation
3. Wait for the network (bounded), then the backoff delay
4. Reset the connection log and connect through the protocol handler
5. Publish CONNECTED with the new handles, or FAILED with the error

Every suspension point races a per-loop CancellationToken, so cancelling
from the UI or closing the session stops the loop right away.
"""

import asyncio
import logging
import time
from typing import Callable, Dict, Optional, Set

from ...const import (
    ERROR_CANCELLED,
    ERROR_RETRIES_EXHAUSTED,
    ERROR_TIMEOUT,
    JUST_CONNECTED_SETTLE_DELAY,
    LOG_ATTEMPT_FAILED,
    LOG_BACKOFF_DELAY,
    LOG_RECONNECT_ATTEMPT,
    MAX_BACKOFF_DELAY,
    NETWORK_WAIT_TIMEOUT,
)
from ...domain.entities.connect_result import ConnectResult
from ...domain.entities.session_record import SessionRecord
from ...domain.helpers.backoff import calculate_backoff_delay
from ...domain.interfaces import (
    IConnectionHandler,
    INetworkMonitor,
    ISessionRegistry,
    ISettingsProvider,
)
from ...domain.value_objects.connection_state import ConnectionState
from ...domain.value_objects.reconnect_outcome import ReconnectOutcome
from ...infrastructure.connection.factory import ConnectionFactory
from ...infrastructure.decorators import handle_connection_errors
from .cancellation_token import CancellationToken

_LOGGER = logging.getLogger(__name__)


class AutoReconnectService:
    """Reconnects failed sessions with exponential backoff.

    At most one loop runs per session. A second ``attempt_reconnect`` for
    a session that is already reconnecting returns False immediately.

    Dependencies (injected):
    - registry: Session records, mutated only through its atomic updates
    - factory: Resolves the protocol handler for a host
    - settings_provider: Read once at the start of every loop
    - network_monitor: Reconnecting waits (bounded) for the network
    - clock: Monotonic seconds, used for the total time limit

    Example:
        >>> service = AutoReconnectService(registry, factory, settings, monitor)
        >>> if await service.attempt_reconnect(tab_id):
        ...     print("back online")
    """

    def __init__(
        self,
        registry: ISessionRegistry,
        factory: ConnectionFactory,
        settings_provider: ISettingsProvider,
        network_monitor: INetworkMonitor,
        clock: Callable[[], float] = time.monotonic,
        max_backoff_delay: int = MAX_BACKOFF_DELAY,
        network_wait_timeout: int = NETWORK_WAIT_TIMEOUT,
        settle_delay: int = JUST_CONNECTED_SETTLE_DELAY,
    ):
        self._registry = registry
        self._factory = factory
        self._settings = settings_provider
        self._network = network_monitor
        self._clock = clock
        self._max_backoff_delay = max_backoff_delay
        self._network_wait_timeout = network_wait_timeout
        self._settle_delay = settle_delay

        self._active: Set[str] = set()
        self._tokens: Dict[str, CancellationToken] = {}
        self._settle_handles: Dict[str, asyncio.TimerHandle] = {}
        self._unsubscribe = registry.subscribe(self._on_registry_change)

    def is_reconnecting(self, record_id: str) -> bool:
        return record_id in self._active

    @handle_connection_errors("Auto-reconnect", reraise=False, default_return=False)
    async def attempt_reconnect(self, record_id: str) -> bool:
        """Run the reconnect loop for a session.

        Args:
            record_id: Tab id of the session to reconnect

        Returns:
            True if the session ended CONNECTED, False otherwise
        """
        outcome = await self.reconnect(record_id)
        return outcome.success

    async def reconnect(self, record_id: str) -> ReconnectOutcome:
        """Run the reconnect loop and report how it ended.

        Same as ``attempt_reconnect`` but returns the detailed outcome and
        lets unexpected errors propagate.
        """
        if record_id in self._active:
            _LOGGER.warning("Reconnect already in progress for %s", record_id)
            return ReconnectOutcome.ALREADY_RUNNING

        token = CancellationToken()
        self._active.add(record_id)
        self._tokens[record_id] = token
        try:
            outcome = await self._run(record_id, token)
        finally:
            # A cancelled loop may already have been replaced by a new one
            if self._tokens.get(record_id) is token:
                del self._tokens[record_id]
                self._active.discard(record_id)

        _LOGGER.debug("Reconnect loop for %s finished: %s", record_id, outcome.value)
        return outcome

    def cancel_reconnect(self, record_id: str) -> None:
        """Stop the reconnect loop of a session, if any.

        Flags the record as cancelled and releases the in-flight slot right
        away, so a new attempt can start before the old loop has unwound.
        """
        self._registry.cancel(record_id)
        token = self._tokens.pop(record_id, None)
        if token is not None:
            token.cancel("cancelled by user")
        self._active.discard(record_id)
        _LOGGER.info("Cancelled reconnect for %s", record_id)

    def flag_just_connected(self, record_id: str) -> None:
        """Raise the just-connected indicator and clear it after a short delay."""
        self._registry.update_connection_state(record_id, just_connected=True)
        previous = self._settle_handles.pop(record_id, None)
        if previous is not None:
            previous.cancel()
        loop = asyncio.get_running_loop()
        self._settle_handles[record_id] = loop.call_later(
            self._settle_delay / 1000, self._clear_just_connected, record_id
        )

    def close(self) -> None:
        """Cancel every loop and timer and stop listening to the registry."""
        for record_id, token in list(self._tokens.items()):
            token.cancel("service closed")
            self._active.discard(record_id)
        self._tokens.clear()
        for handle in self._settle_handles.values():
            handle.cancel()
        self._settle_handles.clear()
        self._unsubscribe()

    async def _wait_for_backoff(self, token: CancellationToken, delay_ms: int) -> bool:
        """Sleep for the backoff delay.

        Returns:
            True if the delay elapsed, False if the loop was cancelled
        """
        return not await token.wait(delay_ms / 1000)

    async def _run(self, record_id: str, token: CancellationToken) -> ReconnectOutcome:
        settings = self._settings.get_auto_reconnect_settings()
        if not settings.enabled:
            _LOGGER.info("Auto-reconnect disabled, not reconnecting %s", record_id)
            return ReconnectOutcome.DISABLED

        record = self._registry.get(record_id)
        if record is None:
            _LOGGER.warning("Cannot reconnect %s: session not found", record_id)
            return ReconnectOutcome.SESSION_NOT_FOUND

        if record.reconnect_cancelled:
            _LOGGER.info("Reconnect for %s was cancelled by the user", record_id)
            return ReconnectOutcome.CANCELLED

        handler = self._factory.get_handler(record.host_config.connection_type)
        if handler is None:
            _LOGGER.error(
                "Cannot reconnect %s: no handler for connection type %s",
                record_id,
                record.host_config.connection_type,
            )
            return ReconnectOutcome.HANDLER_NOT_FOUND

        max_retries = settings.max_retries
        attempt = record.auto_reconnect_retry_count + 1
        started = self._clock()
        _LOGGER.info(
            "Reconnecting %s to %s (attempt %d, max %d)",
            record_id,
            record.host_config.display_name,
            attempt,
            max_retries,
        )

        while attempt <= max_retries:
            elapsed_ms = (self._clock() - started) * 1000
            if elapsed_ms > settings.max_total_time:
                _LOGGER.warning(
                    "Reconnect for %s gave up after %.0fms", record_id, elapsed_ms
                )
                self._registry.update_connection_state(
                    record_id,
                    connection_state=ConnectionState.FAILED,
                    connection_error=ERROR_TIMEOUT.format(seconds=int(elapsed_ms // 1000)),
                )
                self._registry.update_reconnect_state(record_id, is_reconnecting=False)
                return ReconnectOutcome.TIMED_OUT

            current = self._registry.get(record_id)
            if current is None:
                return ReconnectOutcome.SESSION_NOT_FOUND
            if current.reconnect_cancelled or token.cancelled:
                return self._stop_cancelled(record_id, token)

            if not self._network.is_online():
                _LOGGER.info(
                    "Network offline, waiting up to %dms before reconnecting %s",
                    self._network_wait_timeout,
                    record_id,
                )
                completed, restored = await token.guard(
                    self._network.wait_for_online(self._network_wait_timeout)
                )
                if not completed:
                    return self._stop_cancelled(record_id, token)
                if not restored:
                    _LOGGER.info("Network still offline, trying %s anyway", record_id)

            if (
                self._registry.update_reconnect_state(
                    record_id, auto_reconnect_retry_count=attempt, is_reconnecting=True
                )
                is None
            ):
                return ReconnectOutcome.SESSION_NOT_FOUND

            # Logged for every attempt, only waited for from the second on
            delay = calculate_backoff_delay(
                attempt, settings.delay, self._max_backoff_delay
            )
            if attempt > 1:
                _LOGGER.debug("Waiting %dms before attempt %d for %s", delay, attempt, record_id)
                if not await self._wait_for_backoff(token, delay):
                    return self._stop_cancelled(record_id, token)

            current = self._registry.get(record_id)
            if current is None:
                return ReconnectOutcome.SESSION_NOT_FOUND
            if current.reconnect_cancelled or token.cancelled:
                return self._stop_cancelled(record_id, token)

            self._registry.update_connection_state(
                record_id,
                connection_state=ConnectionState.CONNECTING,
                connection_logs=[
                    LOG_RECONNECT_ATTEMPT.format(attempt=attempt, max_retries=max_retries),
                    LOG_BACKOFF_DELAY.format(delay=delay),
                ],
            )

            try:
                completed, result = await token.guard(
                    handler.connect(
                        current.host_config,
                        on_log=lambda line: self._registry.append_log(record_id, line),
                    )
                )
            except Exception as err:  # every connect failure counts as an attempt
                if token.cancelled:
                    return self._abandon_attempt(record_id, token)
                if self._record_failure(record_id, attempt, err) is None:
                    return ReconnectOutcome.SESSION_NOT_FOUND
                if attempt >= max_retries:
                    self._registry.update_connection_state(
                        record_id,
                        connection_state=ConnectionState.FAILED,
                        connection_error=ERROR_RETRIES_EXHAUSTED.format(
                            max_retries=max_retries
                        ),
                    )
                    _LOGGER.warning(
                        "Giving up on %s after %d attempts", record_id, max_retries
                    )
                    return ReconnectOutcome.RETRIES_EXHAUSTED
                attempt += 1
                continue

            if not completed or token.cancelled:
                await self._release(handler, result)
                return self._abandon_attempt(record_id, token)

            return await self._publish_connected(record_id, handler, result, attempt)

        return ReconnectOutcome.RETRIES_EXHAUSTED

    async def _publish_connected(
        self,
        record_id: str,
        handler: IConnectionHandler,
        result: ConnectResult,
        attempt: int,
    ) -> ReconnectOutcome:
        record = self._registry.get(record_id)
        if record is None:
            _LOGGER.info("Session %s closed while connecting, releasing backend", record_id)
            await self._release(handler, result)
            return ReconnectOutcome.SESSION_NOT_FOUND

        self._registry.update_connection_state(
            record_id,
            connection_state=ConnectionState.CONNECTED,
            session_id=result.session_id,
            file_session_id=result.file_session_id,
        )
        self._registry.reset_reconnect_state(record_id)
        self.flag_just_connected(record_id)
        _LOGGER.info("Reconnected %s on attempt %d", record_id, attempt)
        return ReconnectOutcome.CONNECTED

    def _record_failure(
        self, record_id: str, attempt: int, err: Exception
    ) -> Optional[SessionRecord]:
        message = getattr(err, "message", None) or str(err) or type(err).__name__
        _LOGGER.warning("Reconnect attempt %d for %s failed: %s", attempt, record_id, message)
        if self._registry.append_log(
            record_id, LOG_ATTEMPT_FAILED.format(attempt=attempt, error=message)
        ) is None:
            return None
        self._registry.update_connection_state(
            record_id,
            connection_state=ConnectionState.FAILED,
            connection_error=message,
        )
        return self._registry.update_reconnect_state(record_id, is_reconnecting=False)

    def _owns(self, record_id: str, token: CancellationToken) -> bool:
        # False once a newer loop has taken over the session
        return self._tokens.get(record_id, token) is token

    def _abandon_attempt(
        self, record_id: str, token: CancellationToken
    ) -> ReconnectOutcome:
        # Leave a retryable state behind instead of a stale CONNECTING
        if self._owns(record_id, token):
            self._registry.update_connection_state(
                record_id,
                connection_state=ConnectionState.FAILED,
                connection_error=ERROR_CANCELLED,
            )
        return self._stop_cancelled(record_id, token)

    def _stop_cancelled(
        self, record_id: str, token: CancellationToken
    ) -> ReconnectOutcome:
        if not self._owns(record_id, token):
            return ReconnectOutcome.CANCELLED
        if self._registry.update_reconnect_state(record_id, is_reconnecting=False) is None:
            return ReconnectOutcome.SESSION_NOT_FOUND
        _LOGGER.info("Reconnect loop for %s cancelled", record_id)
        return ReconnectOutcome.CANCELLED

    async def _release(self, handler: IConnectionHandler, result) -> None:
        # A connect that completed after cancellation still opened a session
        if isinstance(result, ConnectResult) and result.session_id:
            await handler.close(result.session_id)

    def _clear_just_connected(self, record_id: str) -> None:
        self._settle_handles.pop(record_id, None)
        record = self._registry.get(record_id)
        if record is not None and record.just_connected:
            self._registry.update_connection_state(record_id, just_connected=False)

    def _on_registry_change(
        self, record_id: str, record: Optional[SessionRecord]
    ) -> None:
        token = self._tokens.get(record_id)
        if token is None:
            return
        if record is None:
            token.cancel("session removed")
        elif record.reconnect_cancelled:
            token.cancel("cancelled by user")
