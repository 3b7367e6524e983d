"""Presentation layer for the remote session engine.

The presentation layer is the outermost layer that:
- Wires the dependency graph (DI container)
- Exposes the use cases to the host application's UI

This layer depends on application and domain layers but NOT vice versa.
"""

from .container import DIContainer, create_container, shutdown_container, validate_container

__all__ = [
    "DIContainer",
    "create_container",
    "shutdown_container",
    "validate_container",
]
