"""Unit tests for environment settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from zendesk_client.config import ClientSettings, get_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run without a stray .env file or ZENDESK_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in ("REMOTE_URI", "USERNAME", "PASSWORD", "TOKEN", "OAUTH", "PROXY", "TIMEOUT"):
        monkeypatch.delenv(f"ZENDESK_{name}", raising=False)


class TestClientSettings:
    """Tests for ClientSettings."""

    def test_reads_prefixed_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that ZENDESK_* variables are picked up."""
        monkeypatch.setenv("ZENDESK_REMOTE_URI", "https://acme.zendesk.com/api/v2")
        monkeypatch.setenv("ZENDESK_USERNAME", "agent@acme.com")
        monkeypatch.setenv("ZENDESK_TOKEN", "secret")
        monkeypatch.setenv("ZENDESK_TIMEOUT", "30")

        settings = get_settings()

        assert settings.remote_uri == "https://acme.zendesk.com/api/v2"
        assert settings.timeout == 30.0

    def test_to_client_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test conversion with overrides."""
        monkeypatch.setenv("ZENDESK_REMOTE_URI", "https://acme.zendesk.com/api/v2")
        monkeypatch.setenv("ZENDESK_TOKEN", "oauth-token")
        monkeypatch.setenv("ZENDESK_OAUTH", "true")

        config = ClientSettings().to_client_config(side_load=("users",))

        assert config.oauth is True
        assert config.token == "oauth-token"
        assert config.side_load == ("users",)
        assert config.timeout_seconds == 240.0

    def test_reads_dotenv(self, tmp_path: Path) -> None:
        """Test that a .env file in the working directory is read."""
        (tmp_path / ".env").write_text(
            "ZENDESK_REMOTE_URI=https://dotenv.zendesk.com/api/v2\n", encoding="utf-8"
        )

        assert ClientSettings().remote_uri == "https://dotenv.zendesk.com/api/v2"

    def test_incomplete_env_fails_validation(self) -> None:
        """Test that missing credentials fail at conversion time."""
        with pytest.raises(ValidationError):
            ClientSettings().to_client_config()
