"""Opt-in retry decorator for single requests.

The request core never retries by itself; wrapping the single-call
operation with `with_retry` layers a backoff policy on top of it.
"""

import functools
import random
import time
from collections.abc import Callable
from typing import Annotated, ParamSpec, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field

from zendesk_client.http.constants import (
    HTTP_STATUS_SERVER_ERROR_MAX,
    HTTP_STATUS_SERVER_ERROR_MIN,
    MAX_RETRY_AFTER_SECONDS,
)
from zendesk_client.http.errors import (
    HttpStatusError,
    RateLimitError,
    TransportError,
    ZendeskError,
)
from zendesk_client.observability.metrics import ClientMetrics


logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


class RetryPolicy(BaseModel):
    """Configuration for retry behavior.

    Controls how many times to retry and the backoff strategy.
    Uses exponential backoff: delay = base_delay_ms * (exponential_base ^ attempt)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: Annotated[int, Field(ge=0, le=10)] = 3
    base_delay_ms: Annotated[int, Field(ge=0, le=60000)] = 1000
    max_delay_ms: Annotated[int, Field(ge=0, le=300000)] = 30000
    exponential_base: Annotated[float, Field(ge=1.0, le=5.0)] = 2.0
    jitter_factor: Annotated[float, Field(ge=0.0, le=1.0)] = 0.1

    def should_retry(self, error: ZendeskError, attempt: int) -> bool:
        """Determine if a request should be retried.

        Args:
            error: The error that occurred.
            attempt: Current attempt number (0-indexed).

        Returns:
            True if the request should be retried.
        """
        if attempt >= self.max_retries:
            return False

        if isinstance(error, TransportError | RateLimitError):
            return True

        if isinstance(error, HttpStatusError) and error.status_code is not None:
            return (
                HTTP_STATUS_SERVER_ERROR_MIN
                <= error.status_code
                < HTTP_STATUS_SERVER_ERROR_MAX
            )

        return False

    def get_delay_ms(self, attempt: int) -> int:
        """Calculate delay before the next retry attempt.

        Args:
            attempt: Current attempt number (0-indexed).

        Returns:
            Delay in milliseconds.
        """
        delay = self.base_delay_ms * (self.exponential_base**attempt)
        delay = min(delay, self.max_delay_ms)

        jitter = delay * self.jitter_factor * random.random()  # noqa: S311
        return int(delay + jitter)

    def get_delay_seconds(self, error: ZendeskError, attempt: int) -> float:
        """Delay before retrying after `error`.

        A server-provided retry-after wins over the backoff schedule.
        """
        if isinstance(error, RateLimitError) and error.retry_after:
            return float(min(error.retry_after, MAX_RETRY_AFTER_SECONDS))
        return self.get_delay_ms(attempt) / 1000.0


def with_retry(
    func: Callable[P, R],
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[P, R]:
    """Wrap a request callable with retry-with-backoff.

    Args:
        func: Single-request callable raising `ZendeskError` subclasses.
        policy: Retry policy.
        sleep: Sleep function, injectable for tests.

    Returns:
        Callable with the same signature.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        attempt = 0
        while True:
            try:
                return func(*args, **kwargs)
            except ZendeskError as error:
                if not policy.should_retry(error, attempt):
                    raise
                delay = policy.get_delay_seconds(error, attempt)
                ClientMetrics.get_instance().record_retry()
                logger.info(
                    "retry_attempt",
                    attempt=attempt + 1,
                    max_retries=policy.max_retries,
                    error_kind=error.kind.value,
                    status_code=error.status_code,
                    delay_seconds=delay,
                )
                sleep(delay)
                attempt += 1

    return wrapper
