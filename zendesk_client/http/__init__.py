"""Request layer: URL assembly, dispatch and response classification.

Only dependency-free modules are re-exported here; the executor, transport
and retry decorator are imported from their own modules since they depend
on the configuration package.
"""

from zendesk_client.http.classifier import (
    EmptyResult,
    HttpFailure,
    Outcome,
    ParseFailure,
    RateLimited,
    Success,
    classify,
    extract_primary,
)
from zendesk_client.http.constants import FAIL_CODES
from zendesk_client.http.errors import (
    DecodeError,
    EmptyResultError,
    ErrorKind,
    HttpStatusError,
    RateLimitError,
    TransportError,
    ZendeskError,
)
from zendesk_client.http.models import (
    ApiResponse,
    PaginatedResult,
    RawResponse,
    RequestDescriptor,
    ResourceProfile,
)
from zendesk_client.http.url import assemble_url, encode_query


__all__ = [
    # Classifier
    "EmptyResult",
    "HttpFailure",
    "Outcome",
    "ParseFailure",
    "RateLimited",
    "Success",
    "classify",
    "extract_primary",
    # Constants
    "FAIL_CODES",
    # Errors
    "DecodeError",
    "EmptyResultError",
    "ErrorKind",
    "HttpStatusError",
    "RateLimitError",
    "TransportError",
    "ZendeskError",
    # Models
    "ApiResponse",
    "PaginatedResult",
    "RawResponse",
    "RequestDescriptor",
    "ResourceProfile",
    # URL
    "assemble_url",
    "encode_query",
]
