"""Constants for the remote session engine.

Durations are in milliseconds unless the name says otherwise, matching the
units of the settings file.
"""

from __future__ import annotations

# Auto-reconnect defaults
DEFAULT_RECONNECT_ENABLED = True
DEFAULT_MAX_RETRIES = 3
DEFAULT_RECONNECT_DELAY = 5000  # base backoff, doubled per attempt
DEFAULT_MAX_TOTAL_TIME = 300000  # 5 minutes
MAX_BACKOFF_DELAY = 60000

# Wait for the network before trying anyway
NETWORK_WAIT_TIMEOUT = 30000

# How long the "just connected" indicator stays up after a successful connect
JUST_CONNECTED_SETTLE_DELAY = 400

# Heartbeat defaults
DEFAULT_HEARTBEAT_ENABLED = True
DEFAULT_HEARTBEAT_INTERVAL = 30000
DEFAULT_HEARTBEAT_TIMEOUT = 10000
DEFAULT_HEARTBEAT_MAX_FAILURES = 2

# Connectivity probe defaults
DEFAULT_PROBE_HOST = "1.1.1.1"
DEFAULT_PROBE_PORT = 53
DEFAULT_PROBE_INTERVAL = 10000
DEFAULT_PROBE_TIMEOUT = 3000

# Settings file
CONF_AUTO_RECONNECT = "auto_reconnect"
CONF_HEARTBEAT = "heartbeat"
CONF_ENABLED = "enabled"
CONF_MAX_RETRIES = "max_retries"
CONF_DELAY = "delay"
CONF_MAX_TOTAL_TIME = "max_total_time"
CONF_INTERVAL = "interval"
CONF_TIMEOUT = "timeout"
CONF_MAX_FAILURES = "max_failures"

# Log lines written into a session's connection log
LOG_RECONNECT_ATTEMPT = "Reconnecting... (attempt {attempt}/{max_retries})"
LOG_BACKOFF_DELAY = "Backoff delay: {delay}ms"
LOG_ATTEMPT_FAILED = "Attempt {attempt} failed: {error}"
LOG_HEARTBEAT_DEAD = "Connection heartbeat failed - connection appears dead"

ERROR_TIMEOUT = "Connection failed: timeout after {seconds}s"
ERROR_RETRIES_EXHAUSTED = "Connection failed after {max_retries} attempts"
ERROR_HEARTBEAT_LOST = "Connection lost (heartbeat timeout)"
ERROR_NO_HANDLER = "No handler found for connection type: {protocol}"
ERROR_DEFAULT = "Connection failed"
ERROR_CANCELLED = "Reconnect cancelled"
