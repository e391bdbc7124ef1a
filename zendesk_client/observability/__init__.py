"""Observability: structured logging, debug hooks and metrics."""

from zendesk_client.observability.hooks import HookCallback, HookEvent, HookRegistry
from zendesk_client.observability.logging import configure_logging, redact_event
from zendesk_client.observability.metrics import ClientMetrics


__all__ = [
    "ClientMetrics",
    "HookCallback",
    "HookEvent",
    "HookRegistry",
    "configure_logging",
    "redact_event",
]
