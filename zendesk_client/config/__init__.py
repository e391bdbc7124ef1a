"""Client configuration: model, YAML loader and environment settings."""

from zendesk_client.config.loader import ConfigValidationError, load_client_config
from zendesk_client.config.models import ClientConfig
from zendesk_client.config.settings import ClientSettings, get_settings


__all__ = [
    "ClientConfig",
    "ClientSettings",
    "ConfigValidationError",
    "get_settings",
    "load_client_config",
]
