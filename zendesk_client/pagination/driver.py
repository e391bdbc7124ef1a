"""Cursor pagination driver.

Walks the server-provided `next_page` link until it runs out. Pages are
strictly sequential: the next URL is only known once the previous envelope
has been decoded.
"""

from collections.abc import Iterator
from typing import Any, Protocol

import structlog

from zendesk_client.http.constants import NEXT_PAGE_KEY
from zendesk_client.http.models import ApiResponse, PaginatedResult
from zendesk_client.http.url import PathSpec
from zendesk_client.observability.metrics import ClientMetrics
from zendesk_client.pagination.state_machine import PaginationStateMachine


logger = structlog.get_logger()


class PageFetcher(Protocol):
    """Single-request operation used for every page."""

    def __call__(self, method: str, uri: PathSpec, body: Any = None) -> ApiResponse:
        ...


def next_page_url(envelope: Any) -> str | None:
    """Extract the next page link from a decoded envelope.

    Args:
        envelope: Decoded response body of the previous page.

    Returns:
        The next page URL, or None when the result set is exhausted.
    """
    if not isinstance(envelope, dict):
        return None
    next_page = envelope.get(NEXT_PAGE_KEY)
    if not next_page:
        return None
    return str(next_page)


def flatten_bodies(bodies: list[Any]) -> list[Any]:
    """Concatenate page bodies, flattening exactly one level of lists."""
    flattened: list[Any] = []
    for body in bodies:
        if isinstance(body, list):
            flattened.extend(body)
        else:
            flattened.append(body)
    return flattened


def iter_pages(
    fetch: PageFetcher,
    method: str,
    uri: PathSpec,
    body: Any = None,
    state_machine: PaginationStateMachine | None = None,
) -> Iterator[ApiResponse]:
    """Lazily fetch every page of a result set.

    The first page uses the caller's method, path and body; each later page
    is a GET against the `next_page` link of the page before it.

    Args:
        fetch: Single-request operation (possibly throttled).
        method: HTTP method of the first request.
        uri: Path specification of the first request.
        body: Body of the first request.
        state_machine: State machine to drive, mostly for inspection in tests.

    Yields:
        Each page's ApiResponse, in order.
    """
    machine = state_machine or PaginationStateMachine(request_id=str(uri))
    metrics = ClientMetrics.get_instance()
    request: tuple[str, PathSpec, Any] = (method, uri, body)

    while True:
        machine.to_fetching()
        try:
            page = fetch(*request)
        except Exception:
            machine.to_failed()
            raise
        metrics.record_page()
        yield page

        next_url = next_page_url(page.envelope)
        if next_url is None:
            machine.to_done()
            return
        request = ("GET", next_url, None)


def request_all(
    fetch: PageFetcher,
    method: str,
    uri: PathSpec,
    body: Any = None,
) -> PaginatedResult:
    """Fetch every page and aggregate the results.

    Fails atomically: the first page error is re-raised and no partial
    result is returned.

    Args:
        fetch: Single-request operation (possibly throttled).
        method: HTTP method of the first request.
        uri: Path specification of the first request.
        body: Body of the first request.

    Returns:
        PaginatedResult with one entry per page and the flattened body.
    """
    machine = PaginationStateMachine(request_id=str(uri))
    log = logger.bind(component="pagination", method=method)

    pages: list[ApiResponse] = []
    for page in iter_pages(fetch, method, uri, body, state_machine=machine):
        pages.append(page)
        log.debug("page_fetched", page=len(pages), status_code=page.status_code)

    result = PaginatedResult(
        statuses=[page.status_code for page in pages],
        body=flatten_bodies([page.body for page in pages]),
        responses=[page.raw for page in pages],
        envelopes=[page.envelope for page in pages],
        pages=pages,
    )
    log.info("pagination_complete", pages=result.page_count, records=len(result.body))
    return result
