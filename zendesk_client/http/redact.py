"""Redaction helpers for logging requests."""

import re
from typing import Any

from zendesk_client.http.models import RequestDescriptor


# Headers that must never appear in logs
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "x-api-key",
        "x-auth-token",
        "proxy-authorization",
        "set-cookie",
    }
)

REDACTED_VALUE = "[REDACTED]"

_URL_CREDENTIALS = re.compile(r"(https?://)([^:/@]+):([^@/]+)@")


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers for logging.

    Args:
        headers: Original headers dictionary.

    Returns:
        New dictionary with sensitive values redacted.
    """
    return {
        key: REDACTED_VALUE if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def redact_url_credentials(url: str) -> str:
    """Redact user:password credentials embedded in a URL.

    Args:
        url: URL that may contain credentials.

    Returns:
        URL with credentials redacted.
    """
    return _URL_CREDENTIALS.sub(r"\1[REDACTED]:[REDACTED]@", url)


def redact_descriptor(descriptor: RequestDescriptor) -> dict[str, Any]:
    """Loggable view of a request descriptor.

    The body is reduced to its size and uploads to their file name.
    """
    return {
        "method": descriptor.method,
        "url": redact_url_credentials(descriptor.url),
        "headers": redact_headers(descriptor.headers),
        "body_bytes": len(descriptor.body) if descriptor.body is not None else 0,
        "upload": descriptor.upload_path.name if descriptor.upload_path else None,
    }
