"""Tests for ConnectivityProbe."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from remote_sessions.infrastructure.network import ConnectivityProbe, NetworkStateMonitor

OPEN_CONNECTION = "remote_sessions.infrastructure.network.connectivity_probe.asyncio.open_connection"


def _writer():
    writer = MagicMock()
    writer.wait_closed = AsyncMock()
    return writer


class TestConnectivityProbe:
    """Test reachability checks."""

    @pytest.mark.asyncio
    async def test_reachable_endpoint_sets_online(self):
        monitor = NetworkStateMonitor(online=False)
        probe = ConnectivityProbe(monitor, host="probe.local", port=53)
        writer = _writer()

        with patch(OPEN_CONNECTION, AsyncMock(return_value=(MagicMock(), writer))) as opener:
            assert await probe.check_once()

        opener.assert_awaited_once_with("probe.local", 53)
        writer.close.assert_called_once()
        assert monitor.is_online()

    @pytest.mark.asyncio
    async def test_unreachable_endpoint_sets_offline(self):
        monitor = NetworkStateMonitor()
        probe = ConnectivityProbe(monitor)

        with patch(OPEN_CONNECTION, AsyncMock(side_effect=OSError("unreachable"))):
            assert not await probe.check_once()

        assert not monitor.is_online()

    @pytest.mark.asyncio
    async def test_slow_endpoint_times_out(self):
        monitor = NetworkStateMonitor()
        probe = ConnectivityProbe(monitor, timeout=10)

        async def hang(*_):
            await asyncio.Event().wait()

        with patch(OPEN_CONNECTION, hang):
            assert not await probe.check_once()

        assert not monitor.is_online()

    @pytest.mark.asyncio
    async def test_start_and_stop(self):
        monitor = NetworkStateMonitor(online=False)
        probe = ConnectivityProbe(monitor, interval=10)

        with patch(OPEN_CONNECTION, AsyncMock(return_value=(MagicMock(), _writer()))):
            probe.start()
            probe.start()
            assert probe.is_running
            for _ in range(50):
                if monitor.is_online():
                    break
                await asyncio.sleep(0.005)
            await probe.stop()

        assert monitor.is_online()
        assert not probe.is_running
        await probe.stop()

    @pytest.mark.asyncio
    async def test_stop_when_check_turns_cancel_into_error(self):
        """Test stop() returns even if a running check raises OSError on cancel."""
        monitor = NetworkStateMonitor()
        probe = ConnectivityProbe(monitor, interval=10, timeout=60000)
        connecting = asyncio.Event()

        async def reset_on_cancel(*_):
            connecting.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                raise OSError("Connection reset by peer")

        with patch(OPEN_CONNECTION, reset_on_cancel):
            probe.start()
            await connecting.wait()
            await asyncio.wait_for(probe.stop(), 1)

        assert not probe.is_running
