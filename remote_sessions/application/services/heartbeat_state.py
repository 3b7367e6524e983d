"""Heartbeat State DTO.

Per-session bookkeeping of the heartbeat monitor.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional


@dataclass
class HeartbeatState:
    """Heartbeat bookkeeping for one session.

    Attributes:
        record_id: Tab id of the monitored session
        session_id: Backend session being pinged
        interval: Delay between pings in milliseconds
        timeout: Ping timeout in milliseconds
        max_failures: Consecutive misses before the session is declared dead
        consecutive_failures: Misses since the last successful ping
        last_ping_time: Monotonic time of the last ping sent
        last_pong_time: Monotonic time of the last successful ping
        is_running: Whether the ping loop is active
        task: Background ping task
    """

    record_id: str
    session_id: str
    interval: int
    timeout: int
    max_failures: int
    consecutive_failures: int = 0
    last_ping_time: Optional[float] = None
    last_pong_time: Optional[float] = None
    is_running: bool = True
    task: Optional[asyncio.Task] = None
