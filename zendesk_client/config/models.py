"""Client configuration model."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from zendesk_client.http.constants import (
    DEFAULT_ENCODING,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_TIMEOUT_SECONDS,
)
from zendesk_client.http.retry import RetryPolicy
from zendesk_client.throttle.rate_limiter import ThrottleConfig


class ClientConfig(BaseModel):
    """Immutable per-client settings.

    Holds the API base address, credentials and transport options. One
    instance is owned by one client and never changes after construction.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    remote_uri: Annotated[
        str, Field(min_length=1, description="Base address, e.g. https://x.zendesk.com/api/v2")
    ]
    username: str | None = Field(default=None, description="Account e-mail")
    password: str | None = Field(default=None, description="Account password")
    token: str | None = Field(default=None, description="API or OAuth token")
    oauth: bool = Field(default=False, description="Send the token as a Bearer token")
    proxy: str | None = Field(default=None, description="Proxy URL")
    timeout_seconds: Annotated[float, Field(gt=0.0, le=3600.0)] = DEFAULT_TIMEOUT_SECONDS
    encoding: Annotated[str, Field(min_length=1)] = DEFAULT_ENCODING
    side_load: tuple[str, ...] = Field(
        default=(), description="Relations requested through `include` by default"
    )
    no_cookies: bool = Field(default=False, description="Do not keep a cookie jar")
    max_connections: Annotated[int, Field(ge=1, le=1000)] = DEFAULT_MAX_CONNECTIONS
    throttle: ThrottleConfig | None = None
    retry_policy: RetryPolicy | None = None

    @field_validator("remote_uri")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store the base address without a trailing slash."""
        stripped = v.rstrip("/")
        if not stripped:
            msg = "remote_uri must not be empty"
            raise ValueError(msg)
        return stripped

    @model_validator(mode="after")
    def validate_credentials(self) -> "ClientConfig":
        """Require a credential and, outside OAuth, a username."""
        if self.oauth and not self.token:
            msg = "token is required when oauth is enabled"
            raise ValueError(msg)
        if not self.password and not self.token:
            msg = "one of password or token is required"
            raise ValueError(msg)
        if not self.oauth and not self.username:
            msg = "username is required unless oauth is enabled"
            raise ValueError(msg)
        return self
