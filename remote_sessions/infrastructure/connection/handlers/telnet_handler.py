"""Telnet connection handler."""

from ....domain.value_objects.protocol_type import ProtocolType
from .base import BaseConnectionHandler


class TelnetConnectionHandler(BaseConnectionHandler):
    """Handles Telnet terminal connections.

    Telnet sessions reuse the terminal backend; login prompts are the
    backend's concern.
    """

    @property
    def protocol(self) -> ProtocolType:
        return ProtocolType.TELNET
