"""API client facade.

`ZendeskClient` wires a configuration to a transport, the request
executor, the optional retry and throttle decorators and the pagination
driver. Resource-specific clients subclass it and declare a `resource`
profile (envelope keys and side-load map).
"""

import functools
import time
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from types import TracebackType
from typing import Any, ClassVar, TypeVar

import structlog

from zendesk_client.config.models import ClientConfig
from zendesk_client.http.executor import RequestExecutor
from zendesk_client.http.models import ApiResponse, PaginatedResult, ResourceProfile
from zendesk_client.http.retry import with_retry
from zendesk_client.http.transport import HttpxTransport, Transport
from zendesk_client.http.url import PathSpec
from zendesk_client.observability.hooks import HookCallback, HookEvent, HookRegistry
from zendesk_client.pagination import driver
from zendesk_client.pagination.driver import PageFetcher
from zendesk_client.throttle.rate_limiter import RateLimiterProtocol, throttle


logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])


class ZendeskClient:
    """Client for a paginated, side-loading JSON REST API.

    Example:
        >>> config = ClientConfig(
        ...     remote_uri="https://acme.zendesk.com/api/v2",
        ...     username="agent@acme.com",
        ...     token="secret",
        ... )
        >>> with ZendeskClient(config) as client:
        ...     tickets = client.request_all("GET", ["tickets"]).body
    """

    resource: ClassVar[ResourceProfile] = ResourceProfile()

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport | None = None,
        hooks: HookRegistry | None = None,
        rate_limiter: RateLimiterProtocol | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration.
            transport: Transport to use; defaults to a pooled httpx transport.
            hooks: Debug hook registry shared with the executor.
            rate_limiter: Limiter for the throttle; built from
                `config.throttle` when omitted.
            sleep: Sleep function used between retries.
        """
        self._config = config
        self._transport = transport or HttpxTransport(config)
        self._hooks = hooks or HookRegistry()
        self._executor = RequestExecutor(
            config=config,
            transport=self._transport,
            hooks=self._hooks,
            resource=self.resource,
        )
        if rate_limiter is None and config.throttle is not None:
            rate_limiter = config.throttle.build_limiter()
        self._rate_limiter = rate_limiter
        self._sleep = sleep
        self._log = logger.bind(component="client", remote_uri=config.remote_uri)

    @property
    def config(self) -> ClientConfig:
        """Get the client configuration."""
        return self._config

    @property
    def hooks(self) -> HookRegistry:
        """Get the debug hook registry."""
        return self._hooks

    @property
    def side_load(self) -> tuple[str, ...]:
        """Relations currently requested through `include`."""
        return self._executor.side_load

    def set_side_load(self, relations: Iterable[str]) -> None:
        """Install the list of relations to request as `include`.

        Applies to every later call that does not pass `side_load=`.
        """
        self._executor.set_side_load(relations)
        self._log.debug("side_load_set", relations=list(self._executor.side_load))

    def on(self, event: HookEvent | str, callback: HookCallback) -> None:
        """Subscribe to a debug hook ("debug::request", "debug::response", "debug::error")."""
        self._hooks.on(event, callback)

    def off(self, event: HookEvent | str, callback: HookCallback) -> None:
        """Unsubscribe from a debug hook."""
        self._hooks.off(event, callback)

    def _decorate(self, func: F) -> F:
        """Layer the configured retry policy and throttle around a call."""
        if self._config.retry_policy is not None:
            func = with_retry(func, self._config.retry_policy, sleep=self._sleep)
        if self._rate_limiter is not None:
            func = throttle(func, self._rate_limiter)
        return func

    def _fetcher(
        self,
        side_load: Iterable[str] | None,
        resource: ResourceProfile | None,
    ) -> PageFetcher:
        relations = None if side_load is None else tuple(side_load)
        return self._decorate(
            functools.partial(
                self._executor.execute, side_load=relations, resource=resource
            )
        )

    def request(
        self,
        method: str,
        uri: PathSpec,
        body: Any = None,
        *,
        side_load: Iterable[str] | None = None,
        resource: ResourceProfile | None = None,
    ) -> ApiResponse:
        """Execute a single request.

        Args:
            method: HTTP method.
            uri: Path segments (optionally ending with query data) or a URL.
            body: JSON-serializable request body.
            side_load: Include list for this call only.
            resource: Envelope keys and side-load map for this call only.

        Returns:
            ApiResponse with status, primary payload, raw response and envelope.
        """
        return self._fetcher(side_load, resource)(method, uri, body)

    def iter_pages(
        self,
        method: str,
        uri: PathSpec,
        body: Any = None,
        *,
        side_load: Iterable[str] | None = None,
        resource: ResourceProfile | None = None,
    ) -> Iterator[ApiResponse]:
        """Lazily walk every page of a result set."""
        return driver.iter_pages(self._fetcher(side_load, resource), method, uri, body)

    def request_all(
        self,
        method: str,
        uri: PathSpec,
        body: Any = None,
        *,
        side_load: Iterable[str] | None = None,
        resource: ResourceProfile | None = None,
    ) -> PaginatedResult:
        """Fetch every page of a result set.

        Args:
            method: HTTP method of the first request.
            uri: Path specification of the first request.
            body: Body of the first request.
            side_load: Include list for the first request only; later pages
                follow the server's `next_page` links verbatim.
            resource: Envelope keys and side-load map for every page.

        Returns:
            PaginatedResult with per-page lists and the flattened body.
        """
        return driver.request_all(
            self._fetcher(side_load, resource), method, uri, body
        )

    def request_upload(
        self,
        uri: PathSpec,
        file_path: Path | str,
        *,
        side_load: Iterable[str] | None = None,
        resource: ResourceProfile | None = None,
    ) -> ApiResponse:
        """Upload a file as a binary POST body.

        Args:
            uri: Path specification or URL of the upload endpoint.
            file_path: File to stream.
            side_load: Include list for this call only.
            resource: Envelope keys and side-load map for this call only.

        Returns:
            ApiResponse for the upload.
        """
        relations = None if side_load is None else tuple(side_load)
        upload = self._decorate(
            functools.partial(
                self._executor.upload, side_load=relations, resource=resource
            )
        )
        return upload(uri, file_path)

    def close(self) -> None:
        """Release the transport's pooled connections."""
        self._transport.close()

    def __enter__(self) -> "ZendeskClient":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit."""
        self.close()
