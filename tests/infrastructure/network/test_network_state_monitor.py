"""Tests for NetworkStateMonitor."""

import asyncio

import pytest

from remote_sessions.infrastructure.network import NetworkStateMonitor


class TestNetworkStateMonitor:
    """Test online tracking and waiting."""

    @pytest.mark.asyncio
    async def test_online_returns_immediately(self):
        monitor = NetworkStateMonitor()

        assert monitor.is_online()
        assert await monitor.wait_for_online(1)

    @pytest.mark.asyncio
    async def test_wait_released_when_online(self):
        """Test pending waiters resolve on the online signal."""
        monitor = NetworkStateMonitor(online=False)
        waiter = asyncio.ensure_future(monitor.wait_for_online(30000))
        await asyncio.sleep(0)
        assert monitor.pending_waiters == 1

        monitor.handle_online()

        assert await waiter is True
        assert monitor.pending_waiters == 0

    @pytest.mark.asyncio
    async def test_wait_times_out(self):
        monitor = NetworkStateMonitor(online=False)

        assert await monitor.wait_for_online(10) is False
        assert monitor.pending_waiters == 0

    @pytest.mark.asyncio
    async def test_offline_signal_keeps_waiters(self):
        monitor = NetworkStateMonitor(online=False)
        waiter = asyncio.ensure_future(monitor.wait_for_online(30000))
        await asyncio.sleep(0)

        monitor.handle_offline()
        await asyncio.sleep(0)

        assert not waiter.done()
        monitor.set_online(True)
        assert await waiter

    def test_listeners_notified_on_change_only(self):
        monitor = NetworkStateMonitor()
        seen = []
        unsubscribe = monitor.subscribe(seen.append)

        monitor.set_online(True)
        monitor.set_online(False)
        monitor.set_online(False)
        monitor.set_online(True)
        unsubscribe()
        monitor.set_online(False)

        assert seen == [False, True]

    def test_listener_errors_are_isolated(self, caplog):
        monitor = NetworkStateMonitor()
        seen = []

        def broken(_):
            raise RuntimeError("listener failed")

        monitor.subscribe(broken)
        monitor.subscribe(seen.append)

        monitor.set_online(False)

        assert seen == [False]
        assert "listener failed" in caplog.text
