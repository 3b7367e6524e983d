"""HostConfig entity.

Connection parameters for one remote host, supplied by the caller and
read-only to the engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..value_objects.protocol_type import ProtocolType

DEFAULT_PORTS = {
    ProtocolType.SSH: 22,
    ProtocolType.SFTP: 22,
    ProtocolType.FTP: 21,
    ProtocolType.FTPS: 990,
    ProtocolType.TELNET: 23,
}


@dataclass(frozen=True)
class HostConfig:
    """Remote host description.

    ``connection_type`` is kept as the raw name the caller supplied so that an
    unsupported protocol surfaces as a missing handler instead of failing at
    construction.

    Attributes:
        host: Hostname or IP address
        connection_type: Protocol name (ssh, sftp, ftp, ftps, telnet)
        port: TCP port, or None for the protocol default
        username: Login name, if any
        label: Display label for the tab
        host_id: Identifier of the saved host entry, if any
        options: Extra protocol-specific parameters passed through to the backend

    Example:
        >>> host = HostConfig(host="10.0.0.5", connection_type="sftp")
        >>> host.effective_port
        22
    """

    host: str
    connection_type: str = "ssh"
    port: Optional[int] = None
    username: Optional[str] = None
    label: Optional[str] = None
    host_id: Optional[str] = None
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)

    @property
    def protocol(self) -> Optional[ProtocolType]:
        """Parsed protocol type, or None if unsupported."""
        return ProtocolType.parse(self.connection_type)

    @property
    def effective_port(self) -> Optional[int]:
        """Port to connect to, falling back to the protocol default."""
        if self.port is not None:
            return self.port
        protocol = self.protocol
        return DEFAULT_PORTS.get(protocol) if protocol else None

    @property
    def display_name(self) -> str:
        """Label shown for sessions opened against this host."""
        if self.label:
            return self.label
        if self.username:
            return f"{self.username}@{self.host}"
        return self.host

    def with_options(self, **options: Any) -> "HostConfig":
        """Return a copy with extra backend options merged in."""
        merged: Dict[str, Any] = dict(self.options)
        merged.update(options)
        return HostConfig(
            host=self.host,
            connection_type=self.connection_type,
            port=self.port,
            username=self.username,
            label=self.label,
            host_id=self.host_id,
            options=merged,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HostConfig":
        """Build a HostConfig from a plain mapping.

        Accepts both ``connection_type`` and the camelCase ``connectionType``
        used by saved host files. Unknown keys go into ``options``.

        Raises:
            ValueError: If ``host`` is missing
        """
        if not data.get("host"):
            raise ValueError("Host config requires a 'host'")

        known = {"host", "connection_type", "connectionType", "port", "username", "label", "id", "host_id"}
        return cls(
            host=data["host"],
            connection_type=data.get("connection_type") or data.get("connectionType") or "ssh",
            port=int(data["port"]) if data.get("port") is not None else None,
            username=data.get("username"),
            label=data.get("label"),
            host_id=data.get("host_id") or data.get("id"),
            options={k: v for k, v in data.items() if k not in known},
        )
