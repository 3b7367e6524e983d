"""Session lookup decorators."""

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Optional

from ...domain.exceptions import SessionNotFoundError

_LOGGER = logging.getLogger(__name__)


def require_session(
    id_param: str = "tab_id",
    on_missing: Optional[Callable[[str, str], Any]] = None,
):
    """Decorator to ensure a session record exists before an operation.

    The decorated method's instance must expose the registry as
    ``self._registry``.

    Args:
        id_param: Name of parameter containing the record id
        on_missing: Called with (record_id, error message) to build the
            return value when the record is gone. Without it the decorator
            raises SessionNotFoundError.

    Example:
        @require_session(id_param="tab_id", on_missing=SessionResult.failed)
        async def execute(self, tab_id: str) -> SessionResult:
            # Record is guaranteed to exist on entry
            ...
    """

    def decorator(func: Callable):
        sig = inspect.signature(func)
        params = list(sig.parameters.keys())

        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            record_id = kwargs.get(id_param)
            if record_id is None and id_param in params:
                idx = params.index(id_param) - 1  # -1 for self
                if idx < len(args):
                    record_id = args[idx]

            if not record_id:
                raise ValueError(f"No {id_param} provided")

            if self._registry.get(record_id) is None:
                error_msg = f"Session not found: {record_id}"
                _LOGGER.warning(error_msg)
                if on_missing is not None:
                    return on_missing(record_id, error_msg)
                raise SessionNotFoundError(record_id)

            return await func(self, *args, **kwargs)

        return wrapper

    return decorator
