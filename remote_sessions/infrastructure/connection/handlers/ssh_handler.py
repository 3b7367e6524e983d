"""SSH connection handler."""

from ....domain.value_objects.protocol_type import ProtocolType
from .base import BaseConnectionHandler


class SSHConnectionHandler(BaseConnectionHandler):
    """Handles SSH terminal connections."""

    @property
    def protocol(self) -> ProtocolType:
        return ProtocolType.SSH
