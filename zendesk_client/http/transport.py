"""HTTP transport backed by httpx.

The transport is the only place that talks to the network: it accepts a
`RequestDescriptor` and returns a `RawResponse`. Connection pooling,
keep-alive, proxying and the cookie jar all live here.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

import httpx
import structlog

from zendesk_client.config.models import ClientConfig
from zendesk_client.http.constants import UPLOAD_CHUNK_SIZE
from zendesk_client.http.errors import TransportError
from zendesk_client.http.models import RawResponse, RequestDescriptor
from zendesk_client.http.redact import redact_url_credentials


logger = structlog.get_logger()


class Transport(Protocol):
    """Protocol for transports.

    Allows dependency injection of a fake transport for testing.
    """

    def send(self, descriptor: RequestDescriptor) -> RawResponse:
        """Dispatch a request.

        Raises:
            TransportError: On network failure or timeout.
        """
        ...

    def close(self) -> None:
        """Release pooled connections."""
        ...


def iter_file_chunks(path: Path, chunk_size: int = UPLOAD_CHUNK_SIZE) -> Iterator[bytes]:
    """Stream a file in fixed-size chunks.

    Args:
        path: File to read.
        chunk_size: Bytes per chunk.

    Yields:
        Successive chunks of the file.
    """
    with path.open("rb") as fh:
        while chunk := fh.read(chunk_size):
            yield chunk


class HttpxTransport:
    """Transport using one pooled `httpx.Client` per API client."""

    def __init__(
        self,
        config: ClientConfig,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Client configuration (timeout, proxy, pool size).
            client: Pre-built httpx client, e.g. one using `httpx.MockTransport`.
        """
        self._config = config
        self._client = client or httpx.Client(
            timeout=config.timeout_seconds,
            proxy=config.proxy,
            limits=httpx.Limits(
                max_connections=config.max_connections,
                max_keepalive_connections=config.max_connections,
            ),
            follow_redirects=True,
        )
        self._log = logger.bind(component="transport")

    def send(self, descriptor: RequestDescriptor) -> RawResponse:
        """Dispatch a request through httpx.

        Args:
            descriptor: Request to send.

        Returns:
            RawResponse with status, lower-cased headers and body bytes.

        Raises:
            TransportError: On timeout or any other httpx failure.
        """
        content: bytes | Iterator[bytes] | None = descriptor.body
        if descriptor.upload_path is not None:
            content = iter_file_chunks(descriptor.upload_path)

        try:
            response = self._client.request(
                descriptor.method,
                descriptor.url,
                headers=descriptor.headers,
                content=content,
            )
        except httpx.TimeoutException as e:
            self._log.warning(
                "transport_timeout", url=redact_url_credentials(descriptor.url)
            )
            msg = f"Request timed out: {e}"
            raise TransportError(msg) from e
        except httpx.HTTPError as e:
            self._log.warning(
                "transport_error",
                url=redact_url_credentials(descriptor.url),
                error=str(e),
            )
            msg = f"Request failed: {e}"
            raise TransportError(msg) from e
        except OSError as e:
            msg = f"Could not read upload: {e}"
            raise TransportError(msg) from e

        if self._config.no_cookies:
            self._client.cookies.clear()

        return RawResponse(
            status_code=response.status_code,
            headers={key.lower(): value for key, value in response.headers.items()},
            body=response.content,
        )

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()
