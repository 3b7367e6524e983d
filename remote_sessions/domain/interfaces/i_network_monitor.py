"""INetworkMonitor interface."""

from abc import ABC, abstractmethod


class INetworkMonitor(ABC):
    """Interface for network availability tracking."""

    @abstractmethod
    def is_online(self) -> bool:
        """Last known connectivity state."""

    @abstractmethod
    async def wait_for_online(self, timeout: float) -> bool:
        """Wait for the network to come back.

        Args:
            timeout: Maximum wait in milliseconds

        Returns:
            True as soon as the network is online, False on timeout
        """
