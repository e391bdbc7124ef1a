"""Environment settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from zendesk_client.config.models import ClientConfig
from zendesk_client.http.constants import DEFAULT_TIMEOUT_SECONDS


class ClientSettings(BaseSettings):
    """Client configuration read from `ZENDESK_*` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ZENDESK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    remote_uri: str = Field(default="")
    username: str | None = None
    password: str | None = None
    token: str | None = None
    oauth: bool = False
    proxy: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def to_client_config(self, **overrides: object) -> ClientConfig:
        """Build a validated client configuration.

        Args:
            overrides: Extra `ClientConfig` fields (e.g. `side_load`).

        Returns:
            ClientConfig built from the environment.
        """
        values: dict[str, object] = {
            "remote_uri": self.remote_uri,
            "username": self.username,
            "password": self.password,
            "token": self.token,
            "oauth": self.oauth,
            "proxy": self.proxy,
            "timeout_seconds": self.timeout,
        }
        values.update(overrides)
        return ClientConfig.model_validate(values)


def get_settings() -> ClientSettings:
    """Get a settings instance."""
    return ClientSettings()
