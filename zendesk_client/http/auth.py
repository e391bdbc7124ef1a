"""Authorization header construction."""

import base64
import platform

from zendesk_client.__about__ import __version__
from zendesk_client.config.models import ClientConfig


def build_user_agent() -> str:
    """Build the fixed client identifier sent with every JSON request."""
    return f"zendesk-client/{__version__} (python/{platform.python_version()})"


def build_authorization(config: ClientConfig) -> str:
    """Compute the Authorization header value.

    OAuth wins whenever it is enabled. Otherwise a configured password
    selects Basic `username:password`; without one the API token form
    `username/token:<token>` is used.

    Args:
        config: Client configuration holding the credentials.

    Returns:
        Authorization header value.
    """
    if config.oauth:
        return f"Bearer {config.token}"

    if config.password:
        credentials = f"{config.username}:{config.password}"
    else:
        credentials = f"{config.username}/token:{config.token}"

    encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"
