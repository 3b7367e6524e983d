"""Remote session engine.

Connection lifecycle for remote sessions (SSH, SFTP, FTP, FTPS, Telnet):
session registry, protocol handlers, auto-reconnect with exponential
backoff and heartbeat-based dead session detection.
"""

__version__ = "1.0.0"
