"""Tests for the connection heartbeat."""

import asyncio

import pytest

from remote_sessions.const import ERROR_HEARTBEAT_LOST, LOG_HEARTBEAT_DEAD
from remote_sessions.domain.value_objects import ConnectionState


async def eventually(predicate, timeout: float = 1.0):
    """Poll predicate() until it holds or the timeout expires."""
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition never became true")
        await asyncio.sleep(0.005)


@pytest.fixture
def live_record(registry, host, terminal_backend):
    """SSH session connected to the fake backend."""
    record = registry.create(host)
    session_id = terminal_backend.seed_session()
    return registry.update_connection_state(
        record.id, connection_state=ConnectionState.CONNECTED, session_id=session_id
    )


class TestHeartbeatLifecycle:
    """Test starting and stopping monitors."""

    @pytest.mark.asyncio
    async def test_start_requires_live_session(self, heartbeat_service, registry, host):
        """Test sessions without a backend handle are not monitored."""
        record = registry.create(host)

        assert not heartbeat_service.start(record.id)
        assert not heartbeat_service.is_running(record.id)
        assert not heartbeat_service.start("terminal-missing")

    @pytest.mark.asyncio
    async def test_successful_pings(self, heartbeat_service, live_record, terminal_backend):
        """Test healthy sessions are pinged and stay monitored."""
        assert heartbeat_service.start(live_record.id, interval=10, timeout=100)

        await eventually(lambda: len(terminal_backend.pinged) >= 2)

        state = heartbeat_service.get_state(live_record.id)
        assert state.session_id == "term-1"
        assert state.consecutive_failures == 0
        assert state.last_pong_time is not None
        assert heartbeat_service.is_running(live_record.id)

        heartbeat_service.stop(live_record.id)
        assert not heartbeat_service.is_running(live_record.id)
        assert heartbeat_service.get_state(live_record.id) is None

    @pytest.mark.asyncio
    async def test_start_replaces_previous_monitor(self, heartbeat_service, live_record):
        """Test one monitor per session."""
        heartbeat_service.start(live_record.id, interval=1000)
        first = heartbeat_service.get_state(live_record.id)

        heartbeat_service.start(live_record.id, interval=2000)

        assert not first.is_running
        assert heartbeat_service.get_state(live_record.id).interval == 2000
        assert heartbeat_service.monitored_sessions == [live_record.id]
        await heartbeat_service.shutdown()

    @pytest.mark.asyncio
    async def test_removed_session_stops_monitor(
        self, heartbeat_service, registry, live_record
    ):
        """Test the monitor stops itself when the tab is closed."""
        heartbeat_service.start(live_record.id, interval=10)

        registry.remove(live_record.id)

        await eventually(lambda: not heartbeat_service.is_running(live_record.id))


class TestDeadSessionDetection:
    """Test misses and the hand-over to auto-reconnect."""

    @pytest.mark.asyncio
    async def test_transient_miss_is_forgiven(
        self, heartbeat_service, registry, live_record, terminal_backend
    ):
        """Test one miss below the threshold does not fail the session."""
        terminal_backend.fail_pings(1)
        heartbeat_service.start(live_record.id, interval=10, max_failures=2)

        await eventually(lambda: len(terminal_backend.pinged) >= 2)

        assert heartbeat_service.get_state(live_record.id).consecutive_failures == 0
        assert registry.get(live_record.id).connection_state == ConnectionState.CONNECTED
        await heartbeat_service.shutdown()

    @pytest.mark.asyncio
    async def test_ping_timeout_counts_as_miss(
        self, heartbeat_service, live_record, terminal_backend
    ):
        """Test unanswered pings hit the timeout."""
        terminal_backend.hang_pings()
        heartbeat_service.start(live_record.id, interval=10, timeout=10, max_failures=5)

        await eventually(
            lambda: heartbeat_service.get_state(live_record.id).consecutive_failures >= 1
        )
        await heartbeat_service.shutdown()

    @pytest.mark.asyncio
    async def test_dead_session_is_reconnected(
        self, heartbeat_service, registry, live_record, terminal_backend
    ):
        """Test max misses marks FAILED, reconnects and resumes monitoring."""
        errors = []
        lines = []

        def listener(_, record):
            if record is None:
                return
            if record.connection_error:
                errors.append(record.connection_error)
            for line in record.connection_logs:
                if line not in lines:
                    lines.append(line)

        registry.subscribe(listener)
        terminal_backend.drop_session("term-1")

        heartbeat_service.start(live_record.id, interval=10, max_failures=2)

        await eventually(lambda: registry.get(live_record.id).session_id == "term-2")
        await eventually(lambda: heartbeat_service.is_running(live_record.id))

        record = registry.get(live_record.id)
        assert record.connection_state == ConnectionState.CONNECTED
        assert ERROR_HEARTBEAT_LOST in errors
        assert LOG_HEARTBEAT_DEAD in lines
        assert "term-1" in terminal_backend.closed
        assert heartbeat_service.get_state(live_record.id).session_id == "term-2"
        await heartbeat_service.shutdown()

    @pytest.mark.asyncio
    async def test_dead_session_stays_failed_when_reconnect_fails(
        self, heartbeat_service, registry, settings, live_record, terminal_backend
    ):
        """Test a failed hand-over leaves the session FAILED and unmonitored."""
        settings.update(max_retries=1)
        terminal_backend.drop_session("term-1")
        terminal_backend.fail_always("Host unreachable")

        heartbeat_service.start(live_record.id, interval=10, max_failures=1)

        await eventually(
            lambda: registry.get(live_record.id).connection_error
            == "Connection failed after 1 attempts"
        )
        await eventually(lambda: not heartbeat_service._recovering)
        assert not heartbeat_service.is_running(live_record.id)
