"""Network state monitor.

Tracks online/offline status for reconnect logic:
- Stores the last connectivity signal
- Lets reconnect loops wait for the network to come back
- Notifies subscribers on every change
"""

import asyncio
import logging
from typing import Callable, List, Set

from ...domain.interfaces import INetworkMonitor

_LOGGER = logging.getLogger(__name__)


class NetworkStateMonitor(INetworkMonitor):
    """Online/offline tracker fed by connectivity signals.

    Signals come from the host application (OS network events) or from a
    ConnectivityProbe via ``set_online``.

    Example:
        >>> monitor = NetworkStateMonitor(online=False)
        >>> waiter = asyncio.create_task(monitor.wait_for_online(30000))
        >>> monitor.set_online(True)
        >>> await waiter
        True
    """

    def __init__(self, online: bool = True):
        self._online = online
        self._waiters: Set[asyncio.Future] = set()
        self._listeners: List[Callable[[bool], None]] = []

    def is_online(self) -> bool:
        return self._online

    def set_online(self, online: bool) -> None:
        """Record a connectivity signal.

        Going online releases every pending ``wait_for_online`` call.
        """
        changed = online != self._online
        self._online = online

        if online:
            for waiter in list(self._waiters):
                if not waiter.done():
                    waiter.set_result(True)
            self._waiters.clear()

        if changed:
            _LOGGER.info("Network is %s", "online" if online else "offline")
            for listener in list(self._listeners):
                try:
                    listener(online)
                except Exception as err:
                    _LOGGER.error("Error in network listener: %s", err)

    def handle_online(self) -> None:
        self.set_online(True)

    def handle_offline(self) -> None:
        self.set_online(False)

    async def wait_for_online(self, timeout: float) -> bool:
        """Wait for the network to come back online.

        Args:
            timeout: Maximum wait time in milliseconds

        Returns:
            True if online, False if the timeout elapsed first
        """
        if self._online:
            return True

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.add(waiter)
        try:
            return await asyncio.wait_for(waiter, timeout / 1000)
        except asyncio.TimeoutError:
            _LOGGER.debug("Network still offline after %dms", timeout)
            return False
        finally:
            self._waiters.discard(waiter)

    def subscribe(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        """Subscribe to network state changes.

        Args:
            callback: Called with the new online state when it changes

        Returns:
            Unsubscribe function
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    @property
    def pending_waiters(self) -> int:
        return len(self._waiters)
