"""Infrastructure layer decorators."""

from .error_handler import handle_connection_errors
from .session_decorator import require_session

__all__ = [
    "handle_connection_errors",
    "require_session",
]
