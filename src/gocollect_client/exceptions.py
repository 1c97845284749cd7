"""
Exceptions raised by the GoCollect API client.

Every failure is surfaced to the caller as a subclass of GoCollectError.
Nothing is retried or suppressed by the client.
"""

from typing import Any


class GoCollectError(Exception):
    """Base exception for GoCollect client errors."""

    error_code: str = "GOCOLLECT_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON output."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(GoCollectError):
    """Raised when client configuration is missing or invalid."""

    error_code = "CONFIGURATION_ERROR"


class RequestConstructionError(GoCollectError):
    """Raised when a request cannot be built (bad URL or unencodable body)."""

    error_code = "REQUEST_CONSTRUCTION_ERROR"


class TransportError(GoCollectError):
    """Raised on network-level failures: DNS, refused connections, timeouts."""

    error_code = "TRANSPORT_ERROR"


class APIError(GoCollectError):
    """
    Raised when the API answers with an HTTP status of 400 or above.

    Attributes:
        status_code: HTTP status returned by the server.
        body: Raw response text, kept for diagnostics.
        url: URL of the failed request.
    """

    error_code = "API_ERROR"

    def __init__(
        self,
        status_code: int,
        body: str = "",
        url: str | None = None,
        server_message: str | None = None,
    ):
        message = f"API request failed with status code: {status_code}"
        if server_message:
            message = f"{message} ({server_message})"
        details: dict[str, Any] = {"status_code": status_code}
        if url:
            details["url"] = url
        if body:
            details["body"] = body[:500]
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body
        self.url = url
        self.server_message = server_message


class AuthenticationError(APIError):
    """Token rejected (401) or not allowed to access the resource (403)."""

    error_code = "AUTHENTICATION_ERROR"


class NotFoundError(APIError):
    """Requested resource does not exist (404)."""

    error_code = "NOT_FOUND"


class RateLimitError(APIError):
    """Server-side rate limit exceeded (429)."""

    error_code = "RATE_LIMITED"

    def __init__(
        self,
        status_code: int = 429,
        body: str = "",
        url: str | None = None,
        server_message: str | None = None,
        retry_after: int | None = None,
    ):
        super().__init__(status_code, body, url, server_message)
        self.retry_after = retry_after
        if retry_after is not None:
            self.details["retry_after"] = retry_after


class DecodeError(GoCollectError):
    """Raised when a successful response body is not the JSON we expect."""

    error_code = "DECODE_ERROR"
