from urllib.parse import urlparse
from .outcomes import ErrorDetail

# Error domains carried by ErrorDetail.domain
CONFIGURATION_ERROR = "ConfigurationError"
TRANSPORT_ERROR = "TransportError"
HTTP_STATUS_ERROR = "HttpStatusError"
PARSE_ERROR = "ParseError"
# Only used in logs: a 429 is reported as RateLimited, never as a Failed cause.
RATE_LIMIT_ERROR = "RateLimitError"

NON_HTTP_CODE = -1
RATE_LIMIT_STATUS = 429


def is_success_status(status: int) -> bool:
    return 200 <= status <= 299


def looks_like_url(value: str) -> bool:
    """
    True when value parses into something requestable: a scheme and a host.
    """
    try:
        parsed = urlparse(value)
        return bool(parsed.scheme and parsed.hostname)
    except ValueError:
        # e.g. an unbalanced "[" in the netloc
        return False


def invalid_configuration_error() -> ErrorDetail:
    """
    Convenience factory for a malformed endpoint. Raised before any request
    goes out, so it signals a broken build rather than a runtime condition.
    """
    return ErrorDetail(CONFIGURATION_ERROR, NON_HTTP_CODE, "Invalid configuration URL")


def invalid_response_error() -> ErrorDetail:
    return ErrorDetail(TRANSPORT_ERROR, NON_HTTP_CODE, "Invalid HTTP response")


def transport_error(exc: BaseException) -> ErrorDetail:
    # asyncio.TimeoutError carries no message
    message = str(exc) or type(exc).__name__
    return ErrorDetail(TRANSPORT_ERROR, NON_HTTP_CODE, message, error_type=type(exc).__name__)


def http_status_error(status: int) -> ErrorDetail:
    return ErrorDetail(HTTP_STATUS_ERROR, status, f"HTTP error: {status}")


def parse_error(detail: str | BaseException) -> ErrorDetail:
    error_type = type(detail).__name__ if isinstance(detail, BaseException) else None
    return ErrorDetail(PARSE_ERROR, NON_HTTP_CODE, f"Failed to decode JSON: {detail}", error_type=error_type)
