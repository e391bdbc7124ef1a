"""Classification of raw responses into typed outcomes.

`classify` turns a `RawResponse` into exactly one of `Success`,
`EmptyResult`, `RateLimited`, `HttpFailure` or `ParseFailure`. Checks run
in that precedence: an empty body first, then a retry-after header (even if
the status is also a known failure), then the failure code table, then JSON
decoding.
"""

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

from zendesk_client.http.constants import (
    DEFAULT_ENCODING,
    EMPTY_RESULT_MESSAGE,
    FAIL_CODES,
    HTTP_STATUS_NO_CONTENT,
    RATE_LIMIT_MESSAGE,
    RETRY_AFTER_HEADER,
)
from zendesk_client.http.errors import (
    DecodeError,
    EmptyResultError,
    HttpStatusError,
    RateLimitError,
    ZendeskError,
)
from zendesk_client.http.models import RawResponse


@dataclass(frozen=True)
class Success:
    """Body decoded as JSON."""

    status_code: int
    payload: Any


@dataclass(frozen=True)
class EmptyResult:
    """No body came back at all."""

    status_code: int = HTTP_STATUS_NO_CONTENT
    message: str = EMPTY_RESULT_MESSAGE

    def to_error(self) -> ZendeskError:
        return EmptyResultError(self.message)


@dataclass(frozen=True)
class RateLimited:
    """Response carried a retry-after header."""

    status_code: int
    retry_after: int | None
    body: Any = None
    message: str = RATE_LIMIT_MESSAGE

    def to_error(self) -> ZendeskError:
        return RateLimitError(self.retry_after, result=self.body, message=self.message)


@dataclass(frozen=True)
class HttpFailure:
    """Status code matched the known failure table."""

    status_code: int
    description: str
    body: Any = None

    def to_error(self) -> ZendeskError:
        return HttpStatusError(self.status_code, self.description, result=self.body)


@dataclass(frozen=True)
class ParseFailure:
    """Body was present but not valid JSON.

    Not fatal: the executor degrades it to a null payload.
    """

    status_code: int
    raw_body: str
    reason: str

    def to_error(self) -> ZendeskError:
        return DecodeError(
            f"Could not decode response body: {self.reason}",
            status_code=self.status_code,
            result=self.raw_body,
        )


Outcome = Success | EmptyResult | RateLimited | HttpFailure | ParseFailure
FailureOutcome = EmptyResult | RateLimited | HttpFailure


def parse_retry_after(value: str | None) -> int | None:
    """Parse a Retry-After header value.

    Args:
        value: Header value (seconds or HTTP date).

    Returns:
        Seconds to wait, or None if not parseable.
    """
    if not value:
        return None

    try:
        return int(value)
    except ValueError:
        pass

    try:
        dt = parsedate_to_datetime(value)
        delta = dt - datetime.now(UTC)
        return max(0, int(delta.total_seconds()))
    except (ValueError, TypeError):
        pass

    return None


def _try_decode(raw: RawResponse, encoding: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(raw.body.decode(encoding))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return False, None


def classify(raw: RawResponse, encoding: str = DEFAULT_ENCODING) -> Outcome:
    """Interpret a raw response.

    Args:
        raw: Response produced by the transport.
        encoding: Text encoding of the body.

    Returns:
        The classified outcome.
    """
    if not raw.body:
        return EmptyResult()

    retry_after = raw.header(RETRY_AFTER_HEADER)
    if retry_after:
        decoded, payload = _try_decode(raw, encoding)
        return RateLimited(
            status_code=raw.status_code,
            retry_after=parse_retry_after(retry_after),
            body=payload if decoded else raw.text(encoding),
        )

    description = FAIL_CODES.get(raw.status_code)
    if description is not None:
        decoded, payload = _try_decode(raw, encoding)
        return HttpFailure(
            status_code=raw.status_code,
            description=description,
            body=payload if decoded else raw.text(encoding),
        )

    try:
        payload = json.loads(raw.body.decode(encoding))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        return ParseFailure(
            status_code=raw.status_code,
            raw_body=raw.text(encoding),
            reason=str(e),
        )

    return Success(status_code=raw.status_code, payload=payload)


def extract_primary(payload: Any, envelope_keys: tuple[str, ...]) -> Any:
    """Pick the primary payload out of a decoded envelope.

    Args:
        payload: Decoded JSON body.
        envelope_keys: Candidate keys, checked in order.

    Returns:
        The value under the first candidate present on the body, or the
        whole body if none is present.
    """
    if isinstance(payload, dict):
        for key in envelope_keys:
            if payload.get(key) is not None:
                return payload[key]
    return payload
