"""AutoReconnectSettings entity."""

from dataclasses import dataclass

from ...const import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_TOTAL_TIME,
    DEFAULT_RECONNECT_DELAY,
    DEFAULT_RECONNECT_ENABLED,
)


@dataclass(frozen=True)
class AutoReconnectSettings:
    """Auto-reconnect configuration.

    Attributes:
        enabled: Whether failed sessions are retried automatically
        max_retries: Maximum connect attempts per loop (>= 1)
        delay: Base backoff delay in milliseconds
        max_total_time: Wall-clock cap for one loop in milliseconds
    """

    enabled: bool = DEFAULT_RECONNECT_ENABLED
    max_retries: int = DEFAULT_MAX_RETRIES
    delay: int = DEFAULT_RECONNECT_DELAY
    max_total_time: int = DEFAULT_MAX_TOTAL_TIME

    def __post_init__(self):
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")
        if self.delay < 0:
            raise ValueError(f"delay must be >= 0, got {self.delay}")
        if self.max_total_time < 0:
            raise ValueError(
                f"max_total_time must be >= 0, got {self.max_total_time}"
            )
