"""Single-request execution.

`RequestExecutor` builds one authenticated request, dispatches it through
the transport, classifies the raw response and hands successful payloads
through envelope unwrapping and side-load resolution.
"""

import json
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from zendesk_client.config.models import ClientConfig
from zendesk_client.http.auth import build_authorization, build_user_agent
from zendesk_client.http.classifier import (
    ParseFailure,
    Success,
    classify,
    extract_primary,
)
from zendesk_client.http.constants import (
    CONTENT_TYPE_BINARY,
    CONTENT_TYPE_JSON,
    EMPTY_JSON_BODY,
)
from zendesk_client.http.errors import ZendeskError
from zendesk_client.http.models import (
    ApiResponse,
    RawResponse,
    RequestDescriptor,
    ResourceProfile,
)
from zendesk_client.http.redact import redact_descriptor
from zendesk_client.http.transport import Transport
from zendesk_client.http.url import PathSpec, assemble_url
from zendesk_client.observability.hooks import HookEvent, HookRegistry
from zendesk_client.observability.metrics import ClientMetrics
from zendesk_client.sideload.resolver import resolve


logger = structlog.get_logger()


class RequestExecutor:
    """Builds, dispatches and interprets single API calls.

    Provides:
    - Basic, API-token and OAuth authorization
    - JSON content negotiation (and binary uploads)
    - Typed error outcomes for empty, rate-limited and failed responses
    - Envelope unwrapping and side-load resolution per resource type
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport,
        hooks: HookRegistry | None = None,
        resource: ResourceProfile | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            config: Client configuration.
            transport: Transport used for dispatch.
            hooks: Debug hook registry.
            resource: Default envelope keys and side-load map.
        """
        self._config = config
        self._transport = transport
        self._hooks = hooks or HookRegistry()
        self._resource = resource or ResourceProfile()
        self._side_load: tuple[str, ...] = tuple(config.side_load)
        self._user_agent = build_user_agent()
        self._metrics = ClientMetrics.get_instance()
        self._log = logger.bind(component="executor", remote_uri=config.remote_uri)

    @property
    def side_load(self) -> tuple[str, ...]:
        """Relations requested through `include` when a call does not override them."""
        return self._side_load

    def set_side_load(self, relations: Iterable[str]) -> None:
        """Install the default include list.

        Last writer wins; callers sharing one executor across threads should
        pass `side_load=` per call instead.
        """
        self._side_load = tuple(relations)

    def build_headers(self, content_type: str = CONTENT_TYPE_JSON) -> dict[str, str]:
        """Build request headers.

        Args:
            content_type: Request content type.

        Returns:
            Complete headers dictionary.
        """
        if content_type == CONTENT_TYPE_BINARY:
            return {
                "Content-Type": CONTENT_TYPE_BINARY,
                "Authorization": build_authorization(self._config),
            }
        return {
            "Content-Type": content_type,
            "Accept": CONTENT_TYPE_JSON,
            "User-Agent": self._user_agent,
            "Authorization": build_authorization(self._config),
        }

    def build_url(self, uri: PathSpec, side_load: Iterable[str] | None = None) -> str:
        """Assemble the request URL for `uri`."""
        relations = self._side_load if side_load is None else tuple(side_load)
        return assemble_url(self._config.remote_uri, uri, relations)

    def execute(
        self,
        method: str,
        uri: PathSpec,
        body: Any = None,
        *,
        side_load: Iterable[str] | None = None,
        resource: ResourceProfile | None = None,
    ) -> ApiResponse:
        """Execute one JSON request.

        Args:
            method: HTTP method.
            uri: Path specification or pre-built URL.
            body: JSON-serializable body.
            side_load: Include list for this call only.
            resource: Envelope keys and side-load map for this call only.

        Returns:
            ApiResponse with the primary payload.

        Raises:
            TransportError: On network failure.
            EmptyResultError: If the response has no body.
            RateLimitError: If the response carries a retry-after header.
            HttpStatusError: If the status is a known failure code.
        """
        method = (method or "GET").upper()
        headers = self.build_headers(CONTENT_TYPE_JSON)

        payload: bytes | None = None
        if body is not None:
            payload = json.dumps(body).encode(self._config.encoding)
        elif method != "GET" and headers["Content-Type"] == CONTENT_TYPE_JSON:
            payload = EMPTY_JSON_BODY

        descriptor = RequestDescriptor(
            method=method,
            url=self.build_url(uri, side_load),
            headers=headers,
            body=payload,
        )
        return self._dispatch(descriptor, resource)

    def upload(
        self,
        uri: PathSpec,
        file_path: Path | str,
        *,
        side_load: Iterable[str] | None = None,
        resource: ResourceProfile | None = None,
    ) -> ApiResponse:
        """Upload a file as a binary POST body.

        Args:
            uri: Path specification or pre-built URL.
            file_path: File streamed as the request body.
            side_load: Include list for this call only.
            resource: Envelope keys and side-load map for this call only.

        Returns:
            ApiResponse, handled exactly like a JSON call.

        Raises:
            FileNotFoundError: If `file_path` is not a file.
        """
        path = Path(file_path)
        if not path.is_file():
            msg = f"Upload file not found: {path}"
            raise FileNotFoundError(msg)

        descriptor = RequestDescriptor(
            method="POST",
            url=self.build_url(uri, side_load),
            headers=self.build_headers(CONTENT_TYPE_BINARY),
            upload_path=path,
        )
        return self._dispatch(descriptor, resource)

    def _dispatch(
        self,
        descriptor: RequestDescriptor,
        resource: ResourceProfile | None,
    ) -> ApiResponse:
        loggable = redact_descriptor(descriptor)
        log = self._log.bind(method=descriptor.method, url=loggable["url"])
        self._hooks.emit(HookEvent.REQUEST, descriptor)
        log.debug("request_dispatched", request=loggable)

        start_time_ns = time.perf_counter_ns()
        try:
            raw = self._transport.send(descriptor)
        except ZendeskError as error:
            self._fail(error, log)
            raise
        finally:
            duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
            self._metrics.record_duration(duration_ms)

        self._metrics.record_request(raw.status_code, len(raw.body))
        return self._interpret(raw, resource or self._resource, log)

    def _interpret(
        self,
        raw: RawResponse,
        resource: ResourceProfile,
        log: structlog.stdlib.BoundLogger,
    ) -> ApiResponse:
        outcome = classify(raw, self._config.encoding)

        if isinstance(outcome, ParseFailure):
            # Malformed bodies degrade to a null payload instead of failing.
            error = outcome.to_error()
            self._metrics.record_failure(error.kind)
            self._hooks.emit(
                HookEvent.ERROR,
                {
                    "exception": error,
                    "status_code": raw.status_code,
                    "result": outcome.raw_body,
                },
            )
            log.warning(
                "response_not_json",
                status_code=raw.status_code,
                reason=outcome.reason,
            )
            return ApiResponse(status_code=raw.status_code, body=None, raw=raw)

        if not isinstance(outcome, Success):
            error = outcome.to_error()
            self._fail(error, log)
            raise error

        envelope = outcome.payload
        body = extract_primary(envelope, resource.envelope_keys)
        if resource.side_load_map and body is not None:
            body = resolve(body, envelope, resource.side_load_map)

        self._hooks.emit(
            HookEvent.RESPONSE, {"status_code": raw.status_code, "result": envelope}
        )
        log.debug(
            "response_classified", status_code=raw.status_code, bytes=len(raw.body)
        )
        return ApiResponse(
            status_code=raw.status_code, body=body, raw=raw, envelope=envelope
        )

    def _fail(self, error: ZendeskError, log: structlog.stdlib.BoundLogger) -> None:
        self._metrics.record_failure(error.kind)
        self._hooks.emit(
            HookEvent.ERROR,
            {"exception": error, "status_code": error.status_code, "result": error.result},
        )
        log.warning("request_failed", **error.to_dict())
