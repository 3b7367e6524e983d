"""Infrastructure layer for the remote session engine.

The infrastructure layer contains implementations of domain interfaces:
- Session registry (in-memory, state-machine validated)
- Connection factory and per-protocol handlers
- Network state monitor and connectivity probe
- Settings provider (YAML + voluptuous)

This layer depends on:
- Domain layer (interfaces and entities)
- External libraries (PyYAML, voluptuous)

But domain layer does NOT depend on infrastructure.
"""
