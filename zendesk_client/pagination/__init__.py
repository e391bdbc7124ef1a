"""Cursor pagination over `next_page` links."""

from zendesk_client.pagination.driver import (
    PageFetcher,
    flatten_bodies,
    iter_pages,
    next_page_url,
    request_all,
)
from zendesk_client.pagination.state_machine import (
    PaginationState,
    PaginationStateMachine,
    PaginationStateTransitionError,
)


__all__ = [
    "PageFetcher",
    "PaginationState",
    "PaginationStateMachine",
    "PaginationStateTransitionError",
    "flatten_bodies",
    "iter_pages",
    "next_page_url",
    "request_all",
]
