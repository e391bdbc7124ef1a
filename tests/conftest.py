"""Shared fixtures for client tests."""

from collections.abc import Iterator

import pytest

from zendesk_client.config.models import ClientConfig
from zendesk_client.observability.metrics import ClientMetrics
from zendesk_client.testing import MockTransport


REMOTE_URI = "https://acme.zendesk.com/api/v2"


@pytest.fixture(autouse=True)
def reset_metrics() -> Iterator[None]:
    """Start every test with fresh metrics."""
    ClientMetrics.reset()
    yield
    ClientMetrics.reset()


@pytest.fixture
def config() -> ClientConfig:
    """API-token configuration without side-loads."""
    return ClientConfig(
        remote_uri=REMOTE_URI,
        username="agent@acme.com",
        token="api-token",
    )


@pytest.fixture
def transport() -> MockTransport:
    """Mock transport that blocks unregistered URLs."""
    return MockTransport()
