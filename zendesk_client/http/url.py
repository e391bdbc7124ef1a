"""Endpoint URL assembly.

A path specification is either a sequence of path segments, optionally
ending with query data, or a string. Sequences are turned into
`<remote_uri>/<a>/<b>.json?<query>`; strings are treated as pre-built URLs.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any
from urllib.parse import urlencode

from zendesk_client.http.constants import INCLUDE_PARAM, JSON_SUFFIX


PathSpec = str | Sequence[Any]


def _query_value(value: Any) -> Any:
    """Render booleans the way the API expects them in query strings."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list | tuple):
        return [_query_value(item) for item in value]
    return value


def encode_query(params: Mapping[str, Any]) -> str:
    """URL-encode query parameters.

    Args:
        params: Query parameters; list values repeat the key.

    Returns:
        Encoded query string without the leading "?".
    """
    return urlencode(
        {key: _query_value(value) for key, value in params.items()}, doseq=True
    )


def _build_query(last: Any, include: str) -> tuple[str, bool]:
    """Work out the query suffix for the trailing element of a path sequence.

    Args:
        last: Trailing element of the sequence.
        include: Comma-joined side-load list, empty when none is configured.

    Returns:
        Tuple of (query suffix including "?", whether `last` is a path segment).
    """
    if isinstance(last, Mapping):
        params = dict(last)
        if include:
            params[INCLUDE_PARAM] = include
        query = encode_query(params)
        return (f"?{query}" if query else ""), False

    if last is None or last == "":
        return (f"?{INCLUDE_PARAM}={include}" if include else ""), False

    text = str(last)
    if "?" in text:
        if include:
            text += f"&{INCLUDE_PARAM}={include}"
        return text, False

    return (f"?{INCLUDE_PARAM}={include}" if include else ""), True


def assemble_url(
    remote_uri: str,
    uri: PathSpec,
    side_load: Iterable[str] = (),
) -> str:
    """Build the final request URL.

    Args:
        remote_uri: Base address of the API, without a trailing slash.
        uri: Path segments (optionally ending with a query dict or a "?"
            query string), or a pre-built URL string.
        side_load: Relation names to request through the `include` parameter.

    Returns:
        The URL to dispatch.
    """
    if isinstance(uri, str):
        # Pagination links and other pre-built URLs pass through untouched.
        return uri

    segments = list(uri)
    include = ",".join(side_load)
    query = f"?{INCLUDE_PARAM}={include}" if include else ""

    if segments:
        last = segments.pop()
        query, is_segment = _build_query(last, include)
        if is_segment:
            segments.append(last)

    path = "/".join(str(segment) for segment in segments)
    return f"{remote_uri}/{path}{JSON_SUFFIX}{query}"
