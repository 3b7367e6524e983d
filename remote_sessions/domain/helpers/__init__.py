"""Pure helper functions for the domain layer."""

from .backoff import calculate_backoff_delay

__all__ = [
    "calculate_backoff_delay",
]
