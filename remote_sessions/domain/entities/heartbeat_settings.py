"""HeartbeatSettings entity."""

from dataclasses import dataclass

from ...const import (
    DEFAULT_HEARTBEAT_ENABLED,
    DEFAULT_HEARTBEAT_INTERVAL,
    DEFAULT_HEARTBEAT_MAX_FAILURES,
    DEFAULT_HEARTBEAT_TIMEOUT,
)


@dataclass(frozen=True)
class HeartbeatSettings:
    """Heartbeat configuration.

    Attributes:
        enabled: Whether live sessions are pinged
        interval: Delay between pings in milliseconds
        timeout: Ping timeout in milliseconds
        max_failures: Consecutive misses before the session is declared dead
    """

    enabled: bool = DEFAULT_HEARTBEAT_ENABLED
    interval: int = DEFAULT_HEARTBEAT_INTERVAL
    timeout: int = DEFAULT_HEARTBEAT_TIMEOUT
    max_failures: int = DEFAULT_HEARTBEAT_MAX_FAILURES
