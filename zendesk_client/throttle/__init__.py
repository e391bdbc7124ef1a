"""Throttle decorator enforcing a minimum spacing between requests."""

from zendesk_client.throttle.rate_limiter import (
    RateLimiterProtocol,
    ThrottleConfig,
    TokenBucketRateLimiter,
    throttle,
)


__all__ = [
    "RateLimiterProtocol",
    "ThrottleConfig",
    "TokenBucketRateLimiter",
    "throttle",
]
