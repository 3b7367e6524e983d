"""Tests for the in-memory session registry."""

import pytest

from remote_sessions.domain.entities import HostConfig
from remote_sessions.domain.exceptions import InvalidStateTransitionError
from remote_sessions.domain.value_objects import ConnectionState
from remote_sessions.infrastructure.registry import SessionRegistry


@pytest.fixture
def record(registry, host):
    return registry.create(host)


class TestCreate:
    """Test record creation."""

    def test_create_terminal_record(self, registry, host):
        record = registry.create(host)

        assert record.id.startswith("terminal-")
        assert record.connection_state == ConnectionState.CONNECTING
        assert record.label == "deploy@example.org"
        assert registry.get(record.id) == record
        assert record.id in registry
        assert len(registry) == 1

    def test_file_protocols_get_file_browser_ids(self, registry):
        record = registry.create(HostConfig(host="h", connection_type="ftps"))
        assert record.id.startswith("file-browser-")

    def test_labels_are_unique_ignoring_case(self, registry):
        registry.create(HostConfig(host="h"), label="Prod")
        registry.create(HostConfig(host="h"), label="prod")
        third = registry.create(HostConfig(host="h"), label="Prod")

        assert [r.label for r in registry.list()] == ["Prod", "prod (2)", "Prod (3)"]
        assert third.label == "Prod (3)"


class TestConnectionUpdates:
    """Test update_connection_state."""

    def test_failed_gets_default_error(self, registry, record):
        updated = registry.update_connection_state(
            record.id, connection_state=ConnectionState.FAILED
        )
        assert updated.connection_error == "Connection failed"

    def test_failed_keeps_existing_error(self, registry, record):
        registry.update_connection_state(
            record.id, connection_state=ConnectionState.FAILED, connection_error="Refused"
        )
        updated = registry.update_connection_state(
            record.id, connection_logs=["retrying"]
        )
        assert updated.connection_error == "Refused"
        assert updated.connection_logs == ("retrying",)

    def test_leaving_failed_clears_error(self, registry, record):
        """Test the error is set only while FAILED."""
        registry.update_connection_state(
            record.id, connection_state=ConnectionState.FAILED, connection_error="Refused"
        )
        updated = registry.update_connection_state(
            record.id, connection_state=ConnectionState.CONNECTING
        )
        assert updated.connection_error is None

    def test_error_rejected_outside_failed(self, registry, record):
        with pytest.raises(ValueError):
            registry.update_connection_state(
                record.id,
                connection_state=ConnectionState.CONNECTED,
                connection_error="nope",
            )
        assert registry.get(record.id).connection_state == ConnectionState.CONNECTING

    def test_illegal_transition_raises(self, registry, record):
        """Test FAILED cannot jump straight to CONNECTED."""
        registry.update_connection_state(record.id, connection_state=ConnectionState.FAILED)

        with pytest.raises(InvalidStateTransitionError):
            registry.update_connection_state(
                record.id, connection_state=ConnectionState.CONNECTED
            )
        assert registry.get(record.id).connection_state == ConnectionState.FAILED

    def test_unknown_field_rejected(self, registry, record):
        with pytest.raises(ValueError):
            registry.update_connection_state(record.id, is_reconnecting=True)

    def test_missing_record_is_not_recreated(self, registry):
        assert registry.update_connection_state(
            "terminal-gone", connection_state=ConnectionState.FAILED
        ) is None
        assert registry.append_log("terminal-gone", "line") is None
        assert registry.update_reconnect_state("terminal-gone", is_reconnecting=True) is None
        assert len(registry) == 0

    def test_append_log(self, registry, record):
        registry.append_log(record.id, "one")
        updated = registry.append_log(record.id, "two")
        assert updated.connection_logs == ("one", "two")

    def test_snapshots_are_immutable(self, registry, record):
        """Test old snapshots do not change when the record is updated."""
        registry.append_log(record.id, "one")
        assert record.connection_logs == ()


class TestReconnectUpdates:
    """Test reconnect bookkeeping updates."""

    def test_cancel(self, registry, record):
        registry.update_reconnect_state(record.id, is_reconnecting=True)

        updated = registry.cancel(record.id)

        assert updated.reconnect_cancelled
        assert not updated.is_reconnecting

    def test_reset(self, registry, record):
        registry.update_reconnect_state(
            record.id, auto_reconnect_retry_count=3, reconnect_cancelled=True
        )

        updated = registry.reset_reconnect_state(record.id)

        assert updated.auto_reconnect_retry_count == 0
        assert not updated.reconnect_cancelled

    def test_unknown_field_rejected(self, registry, record):
        with pytest.raises(ValueError):
            registry.update_reconnect_state(record.id, session_id="s")


class TestListeners:
    """Test change notifications."""

    def test_listener_sees_updates_and_removal(self, registry, host):
        events = []
        unsubscribe = registry.subscribe(
            lambda record_id, record: events.append((record_id, record))
        )

        record = registry.create(host)
        registry.append_log(record.id, "line")
        registry.remove(record.id)
        unsubscribe()
        registry.create(host)

        assert [r is None for _, r in events] == [False, False, True]
        assert events[1][1].connection_logs == ("line",)

    def test_failing_listener_does_not_break_updates(self, registry, host, caplog):
        def broken(record_id, record):
            raise RuntimeError("listener bug")

        registry.subscribe(broken)

        record = registry.create(host)

        assert registry.get(record.id) is not None
        assert "listener bug" in caplog.text

    def test_remove_missing(self):
        assert SessionRegistry().remove("terminal-missing") is None
