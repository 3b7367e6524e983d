"""Domain layer for the remote session engine.

This layer contains:
- Interfaces: ABC definitions for handlers, backends, registry, settings, network
- Value Objects: Protocol types, connection states, reconnect outcomes
- Entities: Session records, host configs, settings
- Helpers: Pure functions such as backoff calculation

The domain layer has ZERO dependencies on external libraries (except Python stdlib).
"""
