"""Settings providers."""

from .yaml_settings_provider import (
    AUTO_RECONNECT_SCHEMA,
    HEARTBEAT_SCHEMA,
    SETTINGS_SCHEMA,
    YamlSettingsProvider,
    validate_settings,
)

__all__ = [
    "AUTO_RECONNECT_SCHEMA",
    "HEARTBEAT_SCHEMA",
    "SETTINGS_SCHEMA",
    "YamlSettingsProvider",
    "validate_settings",
]
