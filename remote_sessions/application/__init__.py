"""Application layer for the remote session engine.

This layer contains use cases and application services that orchestrate
domain logic and infrastructure. It sits between the presentation layer
(DI container) and the domain/infrastructure layers.

- Use Cases: open, retry and close a session
- Services: auto-reconnect loop and heartbeat monitor
- DTOs: SessionResult for layer boundaries
"""
