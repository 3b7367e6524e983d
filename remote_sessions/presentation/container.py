"""Dependency Injection Container.

This module implements a simple DI container using dataclasses.
The container holds all dependencies and provides factory methods
for creating the full dependency graph.

Pattern: Service Locator + Factory
- Single place to wire all dependencies
- Tests can inject fake backends and settings
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from ..domain.interfaces import IProtocolBackend


@dataclass
class DIContainer:
    """Dependency Injection Container.

    Holds all dependencies organized by layer:
    - Infrastructure: settings, registry, network, protocol handlers
    - Application: reconnect loop, heartbeat and session use cases

    Attributes:
        terminal_backend: Backend for shell sessions (SSH, SFTP terminal side)
        file_backend: Backend for file sessions (SFTP, FTP, FTPS)
        telnet_backend: Backend for Telnet sessions

        # Infrastructure Layer
        settings_provider: YAML settings provider
        registry: Session registry
        network_monitor: Online/offline state
        connectivity_probe: Optional TCP probe feeding the network monitor
        connection_factory: Protocol handler lookup

        # Application Layer
        reconnect_service: Auto-reconnect loop
        heartbeat_service: Dead session detection
        open_session: Use case for opening a session
        retry_session: Use case for retrying a session
        close_session: Use case for closing a session

    Example:
        >>> container = create_container(ssh_backend, sftp_backend)
        >>> result = await container.open_session.execute(HostConfig(host="example.org"))
    """

    # Core
    terminal_backend: IProtocolBackend
    file_backend: IProtocolBackend
    telnet_backend: Optional[IProtocolBackend] = None

    # Infrastructure Layer (implementations of domain interfaces)
    settings_provider: Optional[Any] = None  # ISettingsProvider
    registry: Optional[Any] = None  # ISessionRegistry
    network_monitor: Optional[Any] = None  # INetworkMonitor
    connectivity_probe: Optional[Any] = None
    connection_factory: Optional[Any] = None

    # Application Layer (use cases and services)
    reconnect_service: Optional[Any] = None
    heartbeat_service: Optional[Any] = None
    open_session: Optional[Any] = None
    retry_session: Optional[Any] = None
    close_session: Optional[Any] = None


def create_container(
    terminal_backend: IProtocolBackend,
    file_backend: IProtocolBackend,
    telnet_backend: Optional[IProtocolBackend] = None,
    settings_path: Optional[Union[str, Path]] = None,
    probe: bool = False,
) -> DIContainer:
    """Factory function to create fully-wired DI container.

    Dependencies are created in order:
    1. Infrastructure layer (no dependencies)
    2. Application layer (depends on infrastructure)

    Must be called from a running event loop when the heartbeat or probe
    will be started.

    Args:
        terminal_backend: Backend for shell sessions
        file_backend: Backend for file sessions
        telnet_backend: Backend for Telnet (defaults to terminal_backend)
        settings_path: YAML settings file, defaults are used without it
        probe: Whether to create a connectivity probe for the network monitor

    Returns:
        Fully-wired DIContainer with all dependencies

    Raises:
        SettingsError: If the settings file is invalid
    """
    container = DIContainer(
        terminal_backend=terminal_backend,
        file_backend=file_backend,
        telnet_backend=telnet_backend,
    )

    # Infrastructure Layer
    container.settings_provider = _create_settings_provider(settings_path)
    container.registry = _create_registry()
    container.network_monitor = _create_network_monitor()
    if probe:
        container.connectivity_probe = _create_connectivity_probe(
            container.network_monitor
        )
    container.connection_factory = _create_connection_factory(
        terminal_backend, file_backend, telnet_backend
    )

    # Application Layer
    container.reconnect_service = _create_reconnect_service(
        registry=container.registry,
        factory=container.connection_factory,
        settings_provider=container.settings_provider,
        network_monitor=container.network_monitor,
    )
    container.heartbeat_service = _create_heartbeat_service(
        registry=container.registry,
        factory=container.connection_factory,
        settings_provider=container.settings_provider,
        reconnect_service=container.reconnect_service,
    )

    from ..application.use_cases import (
        CloseSessionUseCase,
        OpenSessionUseCase,
        RetrySessionUseCase,
        SessionConnector,
    )

    connector = SessionConnector(
        container.registry,
        container.settings_provider,
        container.reconnect_service,
        container.heartbeat_service,
    )
    container.open_session = OpenSessionUseCase(
        container.registry, container.connection_factory, connector
    )
    container.retry_session = RetrySessionUseCase(
        container.registry,
        container.connection_factory,
        container.reconnect_service,
        container.heartbeat_service,
        connector,
    )
    container.close_session = CloseSessionUseCase(
        container.registry,
        container.connection_factory,
        container.reconnect_service,
        container.heartbeat_service,
    )

    return container


async def shutdown_container(container: DIContainer) -> None:
    """Stop every background task owned by the container.

    Sessions stay open; close them through ``close_session`` first if needed.
    """
    if container.connectivity_probe is not None:
        await container.connectivity_probe.stop()
    if container.heartbeat_service is not None:
        await container.heartbeat_service.shutdown()
    if container.reconnect_service is not None:
        container.reconnect_service.close()


# Infrastructure Layer Factory Functions


def _create_settings_provider(settings_path: Optional[Union[str, Path]]) -> Any:
    """Create and load the settings provider.

    Returns:
        ISettingsProvider implementation (YamlSettingsProvider)
    """
    from ..infrastructure.settings import YamlSettingsProvider

    provider = YamlSettingsProvider(settings_path)
    provider.load()
    return provider


def _create_registry() -> Any:
    from ..infrastructure.registry import SessionRegistry

    return SessionRegistry()


def _create_network_monitor() -> Any:
    from ..infrastructure.network import NetworkStateMonitor

    return NetworkStateMonitor()


def _create_connectivity_probe(network_monitor: Any) -> Any:
    """Create connectivity probe.

    Args:
        network_monitor: Monitor the probe reports into

    Returns:
        ConnectivityProbe, not started
    """
    from ..infrastructure.network import ConnectivityProbe

    return ConnectivityProbe(network_monitor)


def _create_connection_factory(
    terminal_backend: Any, file_backend: Any, telnet_backend: Any = None
) -> Any:
    """Create connection factory with a handler for every protocol.

    Returns:
        ConnectionFactory
    """
    from ..infrastructure.connection import ConnectionFactory

    return ConnectionFactory.from_backends(
        terminal_backend, file_backend, telnet_backend=telnet_backend
    )


# Application Layer Factory Functions


def _create_reconnect_service(
    registry: Any, factory: Any, settings_provider: Any, network_monitor: Any
) -> Any:
    from ..application.services import AutoReconnectService

    return AutoReconnectService(registry, factory, settings_provider, network_monitor)


def _create_heartbeat_service(
    registry: Any, factory: Any, settings_provider: Any, reconnect_service: Any
) -> Any:
    from ..application.services import ConnectionHeartbeatService

    return ConnectionHeartbeatService(
        registry, factory, settings_provider, reconnect_service
    )


# Container Validation


def validate_container(container: DIContainer) -> bool:
    """Validate that container has all required dependencies.

    Args:
        container: Container to validate

    Returns:
        True if all critical dependencies are present

    Raises:
        ValueError: If critical dependencies are missing

    Example:
        >>> container = create_container(ssh_backend, sftp_backend)
        >>> assert validate_container(container)
    """
    critical_dependencies = [
        "terminal_backend",
        "file_backend",
        "settings_provider",
        "registry",
        "network_monitor",
        "connection_factory",
        "reconnect_service",
        "heartbeat_service",
        "open_session",
        "retry_session",
        "close_session",
    ]

    missing = []
    for dep_name in critical_dependencies:
        if getattr(container, dep_name, None) is None:
            missing.append(dep_name)

    if missing:
        raise ValueError(f"Missing critical dependencies: {', '.join(missing)}")

    return True
