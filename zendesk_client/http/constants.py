"""HTTP constants for the request layer.

Centralizes header values, status codes and defaults shared by the
executor, classifier and transport.
"""

# Status codes
HTTP_STATUS_NO_CONTENT = 204
HTTP_STATUS_TOO_MANY_REQUESTS = 429
HTTP_STATUS_SERVER_ERROR_MIN = 500
HTTP_STATUS_SERVER_ERROR_MAX = 600

# Known API failure codes. Descriptions are part of the error message
# contract and must stay verbatim.
FAIL_CODES: dict[int, str] = {
    400: "Bad Request",
    401: "Not Authorized",
    403: "Forbidden",
    404: "Item not found",
    405: "Method not Allowed",
    409: "Conflict",
    422: "Unprocessable Entity",  # sent back when an organization name is reused
    429: "Too Many Requests",
    500: "Internal Server Error",
    503: "Service Unavailable",
}

ERROR_NAME = "Zendesk Error"
EMPTY_RESULT_MESSAGE = "Zendesk returned an empty result"
RATE_LIMIT_MESSAGE = "Zendesk rate limits 200 requests per minute"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_BINARY = "application/binary"
EMPTY_JSON_BODY = b"{}"

# Wire conventions
JSON_SUFFIX = ".json"
INCLUDE_PARAM = "include"
NEXT_PAGE_KEY = "next_page"
RETRY_AFTER_HEADER = "retry-after"

# Transport defaults
DEFAULT_TIMEOUT_SECONDS = 240.0
DEFAULT_MAX_CONNECTIONS = 100
DEFAULT_ENCODING = "utf-8"
UPLOAD_CHUNK_SIZE = 64 * 1024

# Maximum retry delay cap for rate limiting (seconds)
MAX_RETRY_AFTER_SECONDS = 60
