"""Tests for CancellationToken."""

import asyncio

import pytest

from remote_sessions.application.services import CancellationToken


class TestCancellationToken:
    """Test cancellation signalling."""

    def test_cancel_keeps_first_reason(self):
        token = CancellationToken()
        assert not token.cancelled

        token.cancel("tab closed")
        token.cancel("user cancelled")

        assert token.cancelled
        assert token.reason == "tab closed"

    @pytest.mark.asyncio
    async def test_wait_times_out(self):
        assert await CancellationToken().wait(0.01) is False

    @pytest.mark.asyncio
    async def test_wait_wakes_on_cancel(self):
        """Test a long sleep ends as soon as the token trips."""
        token = CancellationToken()
        sleeper = asyncio.ensure_future(token.wait(60))
        await asyncio.sleep(0)

        token.cancel()

        assert await asyncio.wait_for(sleeper, 1) is True

    @pytest.mark.asyncio
    async def test_wait_on_cancelled_token(self):
        token = CancellationToken()
        token.cancel()

        assert await token.wait(60) is True

    @pytest.mark.asyncio
    async def test_guard_returns_result(self):
        async def connect():
            return "term-1"

        assert await CancellationToken().guard(connect()) == (True, "term-1")

    @pytest.mark.asyncio
    async def test_guard_propagates_errors(self):
        async def connect():
            raise OSError("refused")

        with pytest.raises(OSError, match="refused"):
            await CancellationToken().guard(connect())

    @pytest.mark.asyncio
    async def test_guard_cancels_awaitable(self):
        """Test the guarded work is cancelled when the token trips."""
        token = CancellationToken()
        started = asyncio.Event()
        interrupted = []

        async def connect():
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                interrupted.append(True)
                raise

        guarded = asyncio.ensure_future(token.guard(connect()))
        await started.wait()
        token.cancel()

        assert await guarded == (False, None)
        assert interrupted == [True]

    @pytest.mark.asyncio
    async def test_guard_reports_late_result(self):
        """Test work that finishes while being cancelled hands back its result."""
        token = CancellationToken()
        started = asyncio.Event()

        async def connect():
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                return "term-9"

        guarded = asyncio.ensure_future(token.guard(connect()))
        await started.wait()
        token.cancel()

        assert await guarded == (False, "term-9")

    @pytest.mark.asyncio
    async def test_outer_cancellation_cancels_inner(self):
        token = CancellationToken()
        inner_cancelled = asyncio.Event()

        async def connect():
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                inner_cancelled.set()
                raise

        guarded = asyncio.ensure_future(token.guard(connect()))
        await asyncio.sleep(0)
        guarded.cancel()

        with pytest.raises(asyncio.CancelledError):
            await guarded
        await asyncio.wait_for(inner_cancelled.wait(), 1)
