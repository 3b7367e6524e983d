"""Connectivity probe feeding a NetworkStateMonitor.

Hosts without OS network events can run this probe: it periodically opens a
TCP connection to a well-known endpoint and reports reachability.
"""

import asyncio
import logging
from typing import Optional

from ...const import (
    DEFAULT_PROBE_HOST,
    DEFAULT_PROBE_INTERVAL,
    DEFAULT_PROBE_PORT,
    DEFAULT_PROBE_TIMEOUT,
)
from .network_state_monitor import NetworkStateMonitor

_LOGGER = logging.getLogger(__name__)


class ConnectivityProbe:
    """Periodic TCP reachability check.

    Attributes:
        _monitor: Monitor receiving the online/offline signal
        _host: Probe endpoint host
        _port: Probe endpoint port
        _interval: Delay between checks (ms)
        _timeout: Connect timeout per check (ms)
    """

    def __init__(
        self,
        monitor: NetworkStateMonitor,
        host: str = DEFAULT_PROBE_HOST,
        port: int = DEFAULT_PROBE_PORT,
        interval: int = DEFAULT_PROBE_INTERVAL,
        timeout: int = DEFAULT_PROBE_TIMEOUT,
    ):
        self._monitor = monitor
        self._host = host
        self._port = port
        self._interval = interval
        self._timeout = timeout
        self._task: Optional[asyncio.Task] = None
        self._stopping: Optional[asyncio.Event] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def check_once(self) -> bool:
        """Run one reachability check and feed the result to the monitor.

        Returns:
            True if the endpoint accepted a TCP connection
        """
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self._host, self._port),
                self._timeout / 1000,
            )
        except (OSError, asyncio.TimeoutError) as err:
            _LOGGER.debug(
                "Probe %s:%d unreachable: %s", self._host, self._port, err
            )
            self._monitor.set_online(False)
            return False

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass  # already torn down by the peer
        self._monitor.set_online(True)
        return True

    def start(self) -> None:
        """Start probing in the background. No-op if already running."""
        if self.is_running:
            return
        self._stopping = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(self._run(self._stopping))
        _LOGGER.debug(
            "Started connectivity probe %s:%d every %dms",
            self._host,
            self._port,
            self._interval,
        )

    async def stop(self) -> None:
        """Stop probing and wait for the background task to finish.

        The loop also watches a stop event, so it ends even when a check in
        progress turns the cancellation into a connection error.
        """
        task, self._task = self._task, None
        if task is None:
            return
        self._stopping.set()
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self, stopping: asyncio.Event) -> None:
        while not stopping.is_set():
            await self.check_once()
            if stopping.is_set():
                break
            try:
                await asyncio.wait_for(stopping.wait(), self._interval / 1000)
            except asyncio.TimeoutError:
                continue
