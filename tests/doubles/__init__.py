"""Test doubles for unit testing.

Test doubles are fake implementations of interfaces used for testing.
They're faster and more reliable than mocking, and they implement the
actual interface contracts.

We primarily use Fakes because they:
- Actually implement the interface
- Can be reused across many tests
- Provide realistic behavior (timeouts, exception replies, lost lines)

Example:
    >>> from tests.doubles import FakeTransport
    >>> transport = FakeTransport(connected=True)
    >>> transport.queue_reply([0x0002, 0x0001])
    >>> words = await transport.execute_request(request)
    >>> assert words == [0x0002, 0x0001]
"""

from .fake_transport import SUCCESS, FakeTransport

__all__ = [
    "FakeTransport",
    "SUCCESS",
]
