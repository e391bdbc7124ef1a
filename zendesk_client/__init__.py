"""HTTP client core for a Zendesk-style REST API.

This package provides:
- Authenticated JSON and binary requests over a pooled httpx transport
- Typed classification of empty, rate-limited and failed responses
- Cursor pagination over `next_page` links
- Side-load resolution joining sibling datasets into primary records
- Opt-in throttle and retry decorators
"""

from zendesk_client.__about__ import __version__
from zendesk_client.client import ZendeskClient
from zendesk_client.config import (
    ClientConfig,
    ClientSettings,
    ConfigValidationError,
    load_client_config,
)
from zendesk_client.http import (
    ApiResponse,
    DecodeError,
    EmptyResultError,
    HttpStatusError,
    PaginatedResult,
    RateLimitError,
    RawResponse,
    RequestDescriptor,
    ResourceProfile,
    TransportError,
    ZendeskError,
)
from zendesk_client.http.retry import RetryPolicy
from zendesk_client.observability import HookEvent, configure_logging
from zendesk_client.sideload import SideLoadMapping
from zendesk_client.throttle import ThrottleConfig


__all__ = [
    "__version__",
    # Client
    "ZendeskClient",
    # Config
    "ClientConfig",
    "ClientSettings",
    "ConfigValidationError",
    "RetryPolicy",
    "ThrottleConfig",
    "load_client_config",
    # Models
    "ApiResponse",
    "PaginatedResult",
    "RawResponse",
    "RequestDescriptor",
    "ResourceProfile",
    "SideLoadMapping",
    # Errors
    "DecodeError",
    "EmptyResultError",
    "HttpStatusError",
    "RateLimitError",
    "TransportError",
    "ZendeskError",
    # Observability
    "HookEvent",
    "configure_logging",
]
