"""Pytest configuration and fixtures for remote session engine tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import remote_sessions
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from unittest.mock import AsyncMock

from remote_sessions.application.services import (
    AutoReconnectService,
    ConnectionHeartbeatService,
)
from remote_sessions.domain.entities import HostConfig
from remote_sessions.domain.value_objects import ConnectionState
from remote_sessions.infrastructure.connection import ConnectionFactory
from remote_sessions.infrastructure.network import NetworkStateMonitor
from remote_sessions.infrastructure.registry import SessionRegistry
from tests.doubles import FakeBackend, FakeClock, FakeSettingsProvider


@pytest.fixture
def host() -> HostConfig:
    """SSH host used by most tests."""
    return HostConfig(host="example.org", username="deploy")


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def terminal_backend() -> FakeBackend:
    return FakeBackend(prefix="term")


@pytest.fixture
def file_backend() -> FakeBackend:
    return FakeBackend(prefix="file")


@pytest.fixture
def factory(terminal_backend, file_backend) -> ConnectionFactory:
    return ConnectionFactory.from_backends(terminal_backend, file_backend)


@pytest.fixture
def settings() -> FakeSettingsProvider:
    return FakeSettingsProvider()


@pytest.fixture
def network() -> NetworkStateMonitor:
    return NetworkStateMonitor()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def reconnect_service(registry, factory, settings, network, clock):
    """AutoReconnectService whose backoff waits return immediately.

    Requested delays are recorded on ``service._wait_for_backoff``.
    """
    service = AutoReconnectService(registry, factory, settings, network, clock=clock)
    service._wait_for_backoff = AsyncMock(return_value=True)
    yield service
    service.close()


@pytest.fixture
def heartbeat_service(registry, factory, settings, reconnect_service):
    return ConnectionHeartbeatService(registry, factory, settings, reconnect_service)


@pytest.fixture
def failed_record(registry, host):
    """SSH session whose first connect failed."""
    record = registry.create(host)
    return registry.update_connection_state(
        record.id,
        connection_state=ConnectionState.FAILED,
        connection_error="Connection refused",
    )
