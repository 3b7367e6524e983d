"""Tests for HostConfig and SessionRecord entities."""

import pytest

from remote_sessions.domain.entities import (
    AutoReconnectSettings,
    HostConfig,
    SessionRecord,
)
from remote_sessions.domain.value_objects import (
    ConnectionState,
    ProtocolType,
    SessionPhase,
)


class TestHostConfig:
    """Test HostConfig entity."""

    def test_defaults(self):
        """Test SSH is the default protocol."""
        host = HostConfig(host="example.org")
        assert host.protocol == ProtocolType.SSH
        assert host.effective_port == 22
        assert host.display_name == "example.org"

    @pytest.mark.parametrize(
        "connection_type,port",
        [("sftp", 22), ("ftp", 21), ("ftps", 990), ("telnet", 23)],
    )
    def test_default_ports(self, connection_type, port):
        """Test each protocol's default port."""
        assert HostConfig(host="h", connection_type=connection_type).effective_port == port

    def test_explicit_port_wins(self):
        """Test an explicit port overrides the default."""
        assert HostConfig(host="h", port=2222).effective_port == 2222

    def test_unknown_protocol(self):
        """Test unsupported protocols parse to None instead of raising."""
        host = HostConfig(host="h", connection_type="rdp")
        assert host.protocol is None
        assert host.effective_port is None

    def test_display_name(self):
        """Test label, then user@host, then host."""
        assert HostConfig(host="h", username="root").display_name == "root@h"
        assert HostConfig(host="h", username="root", label="Prod").display_name == "Prod"

    def test_with_options(self):
        """Test options are merged into a copy."""
        host = HostConfig(host="h", options={"keepalive": 10})
        tls = host.with_options(tls=True)

        assert tls.options == {"keepalive": 10, "tls": True}
        assert host.options == {"keepalive": 10}

    def test_from_dict(self):
        """Test saved host mappings with camelCase keys."""
        host = HostConfig.from_dict(
            {
                "id": "host-7",
                "host": "10.0.0.5",
                "connectionType": "ftp",
                "port": "2121",
                "username": "anon",
                "passive": True,
            }
        )

        assert host.host_id == "host-7"
        assert host.protocol == ProtocolType.FTP
        assert host.port == 2121
        assert host.options == {"passive": True}

    def test_from_dict_requires_host(self):
        with pytest.raises(ValueError):
            HostConfig.from_dict({"connectionType": "ssh"})


class TestSessionRecord:
    """Test SessionRecord entity."""

    def test_new_record_is_connecting(self):
        record = SessionRecord(id="terminal-1", host_config=HostConfig(host="h"))
        assert record.connection_state == ConnectionState.CONNECTING
        assert record.phase == SessionPhase.CONNECTING
        assert record.connection_logs == ()
        assert not record.is_connected

    @pytest.mark.parametrize(
        "state,reconnecting,phase",
        [
            (ConnectionState.CONNECTING, False, SessionPhase.CONNECTING),
            (ConnectionState.CONNECTING, True, SessionPhase.RECONNECTING),
            (ConnectionState.FAILED, True, SessionPhase.BACKOFF),
            (ConnectionState.FAILED, False, SessionPhase.FAILED),
            (ConnectionState.CONNECTED, False, SessionPhase.CONNECTED),
        ],
    )
    def test_phase(self, state, reconnecting, phase):
        """Test the derived phase table."""
        record = SessionRecord(
            id="terminal-1",
            host_config=HostConfig(host="h"),
            connection_state=state,
            is_reconnecting=reconnecting,
        )
        assert record.phase == phase


class TestAutoReconnectSettings:
    """Test AutoReconnectSettings validation."""

    def test_defaults(self):
        settings = AutoReconnectSettings()
        assert settings.enabled
        assert settings.max_retries == 3
        assert settings.delay == 5000
        assert settings.max_total_time == 300000

    @pytest.mark.parametrize(
        "changes",
        [{"max_retries": 0}, {"delay": -1}, {"max_total_time": -5}],
    )
    def test_invalid_values(self, changes):
        with pytest.raises(ValueError):
            AutoReconnectSettings(**changes)
