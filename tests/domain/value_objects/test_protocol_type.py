"""Tests for protocol and outcome value objects."""

import pytest

from remote_sessions.domain.value_objects import ProtocolType, ReconnectOutcome


class TestProtocolType:
    """Test ProtocolType parsing and capabilities."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("ssh", ProtocolType.SSH),
            ("SFTP", ProtocolType.SFTP),
            (" telnet ", ProtocolType.TELNET),
            (ProtocolType.FTPS, ProtocolType.FTPS),
            ("rdp", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, value, expected):
        assert ProtocolType.parse(value) is expected

    def test_capabilities(self):
        """Test SFTP is both a terminal and a file protocol."""
        assert ProtocolType.SFTP.is_terminal
        assert ProtocolType.SFTP.is_file_transfer
        assert not ProtocolType.FTP.is_terminal
        assert not ProtocolType.TELNET.is_file_transfer


class TestReconnectOutcome:
    def test_only_connected_is_success(self):
        assert [outcome for outcome in ReconnectOutcome if outcome.success] == [
            ReconnectOutcome.CONNECTED
        ]
