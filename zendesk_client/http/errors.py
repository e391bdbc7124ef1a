"""Error types raised by the request layer."""

from enum import Enum
from typing import Any

from zendesk_client.http.constants import (
    EMPTY_RESULT_MESSAGE,
    ERROR_NAME,
    HTTP_STATUS_NO_CONTENT,
    HTTP_STATUS_TOO_MANY_REQUESTS,
    RATE_LIMIT_MESSAGE,
)


class ErrorKind(str, Enum):
    """Classification of request errors for metrics and retry decisions.

    - TRANSPORT: Network failure or timeout before a response arrived
    - EMPTY_RESULT: Response carried no body at all
    - RATE_LIMITED: Response carried a retry-after header
    - HTTP_STATUS: Status code matched a known failure code
    - DECODE: Body was not valid JSON
    """

    TRANSPORT = "TRANSPORT"
    EMPTY_RESULT = "EMPTY_RESULT"
    RATE_LIMITED = "RATE_LIMITED"
    HTTP_STATUS = "HTTP_STATUS"
    DECODE = "DECODE"


class ZendeskError(Exception):
    """Base exception for all request errors.

    Carries the HTTP status (when one is known), whatever body came back
    and the retry-after hint so callers can decide how to back off.
    """

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        result: Any = None,
        retry_after: int | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code if available.
            result: Decoded body, or raw text when it could not be decoded.
            retry_after: Seconds the server asked us to wait.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.result = result
        self.retry_after = retry_after

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "retry_after": self.retry_after,
        }


class TransportError(ZendeskError):
    """Network or timeout failure surfaced by the transport."""

    kind = ErrorKind.TRANSPORT


class EmptyResultError(ZendeskError):
    """The server answered without any body."""

    kind = ErrorKind.EMPTY_RESULT

    def __init__(self, message: str = EMPTY_RESULT_MESSAGE) -> None:
        super().__init__(message, status_code=HTTP_STATUS_NO_CONTENT)


class RateLimitError(ZendeskError):
    """The server asked us to slow down.

    The core never retries on its own; `retry_after` is there for the
    caller (or an opt-in retry decorator) to honour.
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        retry_after: int | None,
        result: Any = None,
        message: str = RATE_LIMIT_MESSAGE,
    ) -> None:
        super().__init__(
            message,
            status_code=HTTP_STATUS_TOO_MANY_REQUESTS,
            result=result,
            retry_after=retry_after,
        )


class HttpStatusError(ZendeskError):
    """Response status matched one of the known failure codes."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, status_code: int, description: str, result: Any = None) -> None:
        """Initialize the error.

        Args:
            status_code: HTTP status code.
            description: Description from the failure code table.
            result: Decoded body if present.
        """
        super().__init__(
            f"{ERROR_NAME} ({status_code}): {description}",
            status_code=status_code,
            result=result,
        )
        self.description = description


class DecodeError(ZendeskError):
    """Body could not be decoded as JSON."""

    kind = ErrorKind.DECODE
