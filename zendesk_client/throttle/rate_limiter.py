"""Token-bucket throttle for request spacing."""

import functools
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Annotated, ParamSpec, Protocol, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field


logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


class RateLimiterProtocol(Protocol):
    """Protocol for rate limiters.

    Allows dependency injection of rate limiter for testing.
    """

    def acquire(self, tokens: int = 1) -> bool:
        """Acquire tokens, blocking until available."""
        ...

    def try_acquire(self, tokens: int = 1) -> bool:
        """Try to acquire tokens without blocking."""
        ...


class ThrottleConfig(BaseModel):
    """Throttle settings for a client.

    With the default burst of one token, consecutive calls are spaced at
    least `1 / max_qps` seconds apart.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_qps: Annotated[float, Field(gt=0.0, le=1000.0)]
    burst: Annotated[float, Field(ge=1.0, le=1000.0)] = 1.0

    def build_limiter(self) -> "TokenBucketRateLimiter":
        """Create a limiter with these settings."""
        return TokenBucketRateLimiter(max_qps=self.max_qps, bucket_capacity=self.burst)


@dataclass
class TokenBucketRateLimiter:
    """Token bucket rate limiter for API QPS control.

    Tokens are replenished continuously based on the configured rate.
    Thread-safe; one limiter is meant to be shared by every call of a client.

    Attributes:
        max_qps: Maximum queries per second.
        bucket_capacity: Maximum tokens in the bucket (burst capacity).
    """

    max_qps: float
    bucket_capacity: float = 0.0  # Will be set to max_qps if 0

    _tokens: float = field(init=False, default=0.0)
    _last_refill: float = field(init=False, default=0.0)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _throttled_count: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Initialize the limiter state."""
        if self.bucket_capacity <= 0:
            self.bucket_capacity = self.max_qps
        self._tokens = self.bucket_capacity
        self._last_refill = time.monotonic()

    def _refill(self) -> None:
        """Refill tokens based on elapsed time.

        Must be called while holding the lock.
        """
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(self.bucket_capacity, self._tokens + elapsed * self.max_qps)
        self._last_refill = now

    def acquire(self, tokens: int = 1) -> bool:
        """Acquire tokens, blocking until available.

        Args:
            tokens: Number of tokens to acquire.

        Returns:
            True once the tokens were acquired.
        """
        while True:
            with self._lock:
                self._refill()
                if self._tokens >= tokens:
                    self._tokens -= tokens
                    return True
                wait_time = (tokens - self._tokens) / self.max_qps
                self._throttled_count += 1

            # Release lock before sleeping
            logger.debug("throttle_wait", wait_seconds=round(wait_time, 4))
            time.sleep(wait_time)

    def try_acquire(self, tokens: int = 1) -> bool:
        """Try to acquire tokens without blocking.

        Args:
            tokens: Number of tokens to acquire.

        Returns:
            True if tokens were acquired, False otherwise.
        """
        with self._lock:
            self._refill()
            if self._tokens >= tokens:
                self._tokens -= tokens
                return True
            self._throttled_count += 1
            return False

    @property
    def throttled_count(self) -> int:
        """Number of times a caller had to wait or was refused."""
        with self._lock:
            return self._throttled_count

    def get_available_tokens(self) -> float:
        """Get the current number of available tokens."""
        with self._lock:
            self._refill()
            return self._tokens


def throttle(func: Callable[P, R], limiter: RateLimiterProtocol) -> Callable[P, R]:
    """Delay each call of `func` until the limiter hands out a token.

    Args:
        func: Callable to wrap.
        limiter: Limiter shared by every call.

    Returns:
        Callable with the same signature as `func`.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        limiter.acquire()
        return func(*args, **kwargs)

    return wrapper
