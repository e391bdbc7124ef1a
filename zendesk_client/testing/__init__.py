"""Test doubles for code built on the client."""

from zendesk_client.testing.mock_transport import (
    MockTransport,
    MockTransportStats,
    NetworkAccessBlockedError,
    RequestRecord,
)


__all__ = [
    "MockTransport",
    "MockTransportStats",
    "NetworkAccessBlockedError",
    "RequestRecord",
]
