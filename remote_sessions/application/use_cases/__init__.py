"""Use cases for the remote session engine.

Each use case has a single public ``execute`` method and returns a
SessionResult DTO.

One class per file.
"""

from .session_result import SessionResult
from .session_connector import SessionConnector
from .open_session_use_case import OpenSessionUseCase
from .retry_session_use_case import RetrySessionUseCase
from .close_session_use_case import CloseSessionUseCase

__all__ = [
    "SessionResult",
    "SessionConnector",
    "OpenSessionUseCase",
    "RetrySessionUseCase",
    "CloseSessionUseCase",
]
