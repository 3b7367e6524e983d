"""Cancellation token for reconnect loops."""

import asyncio
from typing import Any, Awaitable, Optional, Tuple


class CancellationToken:
    """One-shot cancellation signal threaded through every suspension point.

    Waiting on the token wakes up as soon as ``cancel`` is called, so a
    cancelled loop stops immediately instead of on its next poll.

    Example:
        >>> token = CancellationToken()
        >>> completed, result = await token.guard(handler.connect(host))
        >>> if not completed:
        ...     return  # cancelled while connecting
    """

    def __init__(self):
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "cancelled") -> None:
        """Trip the token. Later calls keep the first reason."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    async def wait(self, timeout: float) -> bool:
        """Sleep for up to ``timeout`` seconds, waking early on cancellation.

        Returns:
            True if the token was cancelled, False if the timeout elapsed
        """
        if self.cancelled:
            return True
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def guard(self, awaitable: Awaitable[Any]) -> Tuple[bool, Any]:
        """Await something unless the token trips first.

        Exceptions raised by the awaitable propagate. If the token trips
        first the awaitable is cancelled.

        Returns:
            (True, result) if the awaitable finished, or (False, late_result)
            if the token tripped first, where late_result is whatever the
            awaitable returned while being cancelled (usually None)
        """
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task.done():
            return True, task.result()

        task.cancel()
        (late,) = await asyncio.gather(task, return_exceptions=True)
        return False, None if isinstance(late, BaseException) else late
