"""Test doubles for unit testing.

Test doubles are fake implementations of interfaces used for testing.
They're faster and more reliable than mocking, and they implement the
actual interface contracts.

We primarily use Fakes because they:
- Actually implement the interface
- Can be reused across many tests
- Provide realistic behavior

Example:
    >>> from tests.doubles import FakeBackend
    >>> backend = FakeBackend()
    >>> backend.fail_next(1, "Connection refused")
    >>> session_id = await backend.open(HostConfig(host="a"))  # raises once
"""

from .fake_backend import FakeBackend
from .fake_clock import FakeClock
from .fake_settings_provider import FakeSettingsProvider

__all__ = [
    "FakeBackend",
    "FakeClock",
    "FakeSettingsProvider",
]
