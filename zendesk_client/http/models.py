"""Data models for the request layer."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from zendesk_client.http.constants import DEFAULT_ENCODING
from zendesk_client.sideload.models import SideLoadMapping


class RequestDescriptor(BaseModel):
    """Everything the transport needs to send one request.

    Built fresh for every call and never shared between calls.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: Annotated[str, Field(min_length=1, description="HTTP method")]
    url: Annotated[str, Field(min_length=1, description="Fully assembled URL")]
    headers: dict[str, str] = Field(
        default_factory=dict, description="Request headers"
    )
    body: bytes | None = Field(default=None, description="Serialized JSON body")
    upload_path: Path | None = Field(
        default=None, description="File streamed as the request body"
    )


class RawResponse(BaseModel):
    """Raw outcome of a dispatched request, as produced by the transport."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status_code: int = Field(ge=100, le=599, description="HTTP status code")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Response headers, lower-cased names"
    )
    body: bytes = Field(default=b"", description="Response body")

    def header(self, name: str) -> str | None:
        """Look up a header case-insensitively.

        Args:
            name: Header name.

        Returns:
            Header value, or None if absent.
        """
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def text(self, encoding: str = DEFAULT_ENCODING) -> str:
        """Decode the body to text, replacing undecodable bytes."""
        return self.body.decode(encoding, errors="replace")

    @classmethod
    def from_json(
        cls,
        payload: Any,
        status_code: int = 200,
        headers: dict[str, str] | None = None,
    ) -> "RawResponse":
        """Build a response whose body is `payload` serialized as JSON."""
        return cls(
            status_code=status_code,
            headers={"content-type": "application/json", **(headers or {})},
            body=json.dumps(payload).encode(DEFAULT_ENCODING),
        )


class ResourceProfile(BaseModel):
    """Per-resource-type response handling.

    `envelope_keys` are checked in order and the first one present on the
    decoded body supplies the primary payload. `side_load_map` is applied to
    that payload afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    envelope_keys: tuple[str, ...] = Field(
        default=(), description="Ordered candidate keys for the primary payload"
    )
    side_load_map: tuple[SideLoadMapping, ...] = Field(
        default=(), description="Joins applied to the primary payload"
    )


@dataclass(frozen=True)
class ApiResponse:
    """Result of one successful call.

    Attributes:
        status_code: HTTP status code.
        body: Primary payload (after envelope unwrapping and side-loading).
        raw: The raw transport response.
        envelope: The full decoded JSON body, or None if it did not decode.
    """

    status_code: int
    body: Any
    raw: RawResponse
    envelope: Any = None


@dataclass(frozen=True)
class PaginatedResult:
    """Aggregate of every page fetched by the pagination driver.

    Attributes:
        statuses: Status code of each page, in fetch order.
        body: Page bodies flattened one level into a single list.
        responses: Raw response of each page.
        envelopes: Decoded envelope of each page.
        pages: The per-page results.
    """

    statuses: list[int]
    body: list[Any]
    responses: list[RawResponse]
    envelopes: list[Any]
    pages: list[ApiResponse]

    @property
    def page_count(self) -> int:
        """Number of pages fetched."""
        return len(self.pages)
