"""Settings provider backed by a YAML file.

Example settings.yaml:

    auto_reconnect:
      enabled: true
      max_retries: 3
      delay: 5000          # ms, doubled per attempt
      max_total_time: 300000
    heartbeat:
      enabled: true
      interval: 30000
      timeout: 10000
      max_failures: 2

Every key is optional; missing keys and a missing file fall back to the
defaults in const.py.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import voluptuous as vol
import yaml

from ...const import (
    CONF_AUTO_RECONNECT,
    CONF_DELAY,
    CONF_ENABLED,
    CONF_HEARTBEAT,
    CONF_INTERVAL,
    CONF_MAX_FAILURES,
    CONF_MAX_RETRIES,
    CONF_MAX_TOTAL_TIME,
    CONF_TIMEOUT,
    DEFAULT_HEARTBEAT_ENABLED,
    DEFAULT_HEARTBEAT_INTERVAL,
    DEFAULT_HEARTBEAT_MAX_FAILURES,
    DEFAULT_HEARTBEAT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_TOTAL_TIME,
    DEFAULT_RECONNECT_DELAY,
    DEFAULT_RECONNECT_ENABLED,
)
from ...domain.entities.auto_reconnect_settings import AutoReconnectSettings
from ...domain.entities.heartbeat_settings import HeartbeatSettings
from ...domain.exceptions import SettingsError
from ...domain.interfaces import ISettingsProvider

_LOGGER = logging.getLogger(__name__)

_MILLISECONDS = vol.All(vol.Coerce(int), vol.Range(min=0))

AUTO_RECONNECT_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_ENABLED, default=DEFAULT_RECONNECT_ENABLED): vol.Boolean(),
        vol.Optional(CONF_MAX_RETRIES, default=DEFAULT_MAX_RETRIES): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=100)
        ),
        vol.Optional(CONF_DELAY, default=DEFAULT_RECONNECT_DELAY): _MILLISECONDS,
        vol.Optional(
            CONF_MAX_TOTAL_TIME, default=DEFAULT_MAX_TOTAL_TIME
        ): _MILLISECONDS,
    }
)

HEARTBEAT_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_ENABLED, default=DEFAULT_HEARTBEAT_ENABLED): vol.Boolean(),
        vol.Optional(CONF_INTERVAL, default=DEFAULT_HEARTBEAT_INTERVAL): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(CONF_TIMEOUT, default=DEFAULT_HEARTBEAT_TIMEOUT): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(
            CONF_MAX_FAILURES, default=DEFAULT_HEARTBEAT_MAX_FAILURES
        ): vol.All(vol.Coerce(int), vol.Range(min=1)),
    }
)

SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_AUTO_RECONNECT, default={}): AUTO_RECONNECT_SCHEMA,
        vol.Optional(CONF_HEARTBEAT, default={}): HEARTBEAT_SCHEMA,
    },
    # Other application sections (ui, shortcuts...) live in the same file
    extra=vol.ALLOW_EXTRA,
)


def validate_settings(data: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Validate a raw settings mapping and fill in defaults.

    Raises:
        SettingsError: If the mapping does not match the schema
    """
    try:
        return SETTINGS_SCHEMA(dict(data or {}))
    except vol.Invalid as err:
        raise SettingsError(f"Invalid settings: {err}") from err


class YamlSettingsProvider(ISettingsProvider):
    """ISettingsProvider reading a YAML settings file.

    The file is read once by ``load``; updates made through the
    ``update_*`` methods are validated and kept in memory.

    Example:
        >>> provider = YamlSettingsProvider("~/.config/remote-sessions/settings.yaml")
        >>> provider.load()
        >>> provider.get_auto_reconnect_settings().max_retries
        3
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._path = Path(path).expanduser() if path is not None else None
        self._auto_reconnect = AutoReconnectSettings()
        self._heartbeat = HeartbeatSettings()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def load(self) -> None:
        """Read and validate the settings file.

        Raises:
            SettingsError: If the file is not valid YAML or fails validation
        """
        if self._path is None or not self._path.exists():
            _LOGGER.debug("No settings file at %s, using defaults", self._path)
            self._apply(validate_settings({}))
            return

        try:
            raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        except yaml.YAMLError as err:
            raise SettingsError(f"Invalid YAML in {self._path}: {err}") from err

        if raw is not None and not isinstance(raw, Mapping):
            raise SettingsError(f"Settings file {self._path} must contain a mapping")

        self._apply(validate_settings(raw))
        _LOGGER.info("Loaded settings from %s", self._path)

    def load_from_mapping(self, data: Optional[Mapping[str, Any]]) -> None:
        """Validate and apply settings from an already parsed mapping."""
        self._apply(validate_settings(data))

    def get_auto_reconnect_settings(self) -> AutoReconnectSettings:
        return self._auto_reconnect

    def get_heartbeat_settings(self) -> HeartbeatSettings:
        return self._heartbeat

    def update_auto_reconnect_settings(self, **changes: Any) -> AutoReconnectSettings:
        """Merge changes into the auto-reconnect settings.

        Raises:
            SettingsError: If the merged settings are invalid
        """
        merged = {**asdict(self._auto_reconnect), **changes}
        try:
            validated = AUTO_RECONNECT_SCHEMA(merged)
        except vol.Invalid as err:
            raise SettingsError(f"Invalid auto-reconnect settings: {err}") from err
        self._auto_reconnect = AutoReconnectSettings(**validated)
        return self._auto_reconnect

    def update_heartbeat_settings(self, **changes: Any) -> HeartbeatSettings:
        """Merge changes into the heartbeat settings.

        Raises:
            SettingsError: If the merged settings are invalid
        """
        merged = {**asdict(self._heartbeat), **changes}
        try:
            validated = HEARTBEAT_SCHEMA(merged)
        except vol.Invalid as err:
            raise SettingsError(f"Invalid heartbeat settings: {err}") from err
        self._heartbeat = HeartbeatSettings(**validated)
        return self._heartbeat

    def _apply(self, validated: Mapping[str, Any]) -> None:
        self._auto_reconnect = AutoReconnectSettings(**validated[CONF_AUTO_RECONNECT])
        self._heartbeat = HeartbeatSettings(**validated[CONF_HEARTBEAT])
