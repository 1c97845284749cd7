"""
GoCollect API client implementation.

Wrapper for GoCollect API calls including:
- Bearer token authentication
- Request construction (path, query string, JSON body)
- Response decoding and error mapping

No retries, caching or rate limiting are performed; every failure is raised
to the caller on the first attempt.
"""

import json
import logging
from decimal import Decimal
from typing import Any, Callable, TypeVar
from urllib.parse import urljoin, urlsplit

import requests

from src.gocollect_client.collectibles import CollectiblesService
from src.gocollect_client.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    NotFoundError,
    RateLimitError,
    RequestConstructionError,
    TransportError,
)
from src.gocollect_client.insights import InsightsService
from src.gocollect_client.sold_examples import SoldExamplesService
from src.gocollect_client.staged_sales import StagedSalesService
from src.utils.config_loader import AppConfig, get_api_token

logger = logging.getLogger(__name__)

__version__ = "1.0.0"

DEFAULT_BASE_URL = "https://gocollect.com"
USER_AGENT = f"gocollect-client-python/{__version__}"

T = TypeVar("T")

Timeout = float | tuple[float, float] | None


def _validate_base_url(base_url: str) -> str:
    """Return base_url if it is an absolute http(s) URL, else raise ConfigurationError."""
    try:
        parts = urlsplit(base_url)
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigurationError(f"Invalid base URL: {base_url!r}", {"base_url": base_url}) from e

    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(
            f"Base URL must be an absolute http(s) URL: {base_url!r}",
            {"base_url": base_url},
        )
    return base_url


def _validate_timeout(timeout: Timeout) -> Timeout:
    if timeout is None:
        return None
    values = timeout if isinstance(timeout, tuple) else (timeout,)
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigurationError(f"Invalid timeout: {timeout!r}", {"timeout": timeout})
    return timeout


def _parse_retry_after(value: str | None) -> int | None:
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


class GoCollectClient:
    """
    Client for interacting with the GoCollect API.

    Handles:
    - API authentication via bearer token
    - Building and sending requests
    - Mapping HTTP failures to exceptions

    Resource groups are exposed as services:
    ``collectibles``, ``insights``, ``sold_examples`` and ``staged_sales``.

    Attributes:
        base_url: Base URL for API requests.
        session: Requests session used as the transport.
        timeout: Timeout passed to every request (None = wait forever).
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        timeout: Timeout = None,
    ) -> None:
        """
        Initialize the GoCollect API client.

        Args:
            token: GoCollect API token, sent as a bearer credential.
            base_url: API base URL. Must be an absolute http(s) URL.
            session: Transport to use. A new requests.Session if None.
            timeout: Seconds, or a (connect, read) tuple. None means no timeout.

        Raises:
            ConfigurationError: If base_url or timeout is invalid.
        """
        self._token = token
        self.base_url = _validate_base_url(base_url)
        self.timeout = _validate_timeout(timeout)

        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

        self.collectibles = CollectiblesService(self)
        self.insights = InsightsService(self)
        self.sold_examples = SoldExamplesService(self)
        self.staged_sales = StagedSalesService(self)

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> "GoCollectClient":
        """
        Create a client from application configuration.

        Args:
            config: Application configuration with a gocollect section.
            token: API token. If None, read from the env variable named in config.
            session: Optional transport override.

        Raises:
            ConfigurationError: If no token is available or config is invalid.
        """
        token = token or get_api_token(config)
        if not token:
            raise ConfigurationError(
                "GoCollect API token is required but not configured. "
                f"Set the {config.gocollect.api_key_env} environment variable "
                "or provide a token directly.",
                {"api_key_env": config.gocollect.api_key_env},
            )
        return cls(
            token,
            base_url=config.gocollect.base_url,
            session=session,
            timeout=config.gocollect.timeout,
        )

    @property
    def token(self) -> str:
        """The API token this client authenticates with."""
        return self._token

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "GoCollectClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"GoCollectClient(base_url={self.base_url!r})"

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    def build_request(
        self,
        method: str,
        path: str,
        body: Any = None,
    ) -> requests.PreparedRequest:
        """
        Build an authenticated API request.

        Args:
            method: HTTP method (GET, POST, ...).
            path: Path and optional query string, resolved against base_url.
            body: JSON-serializable request body, or None for no payload.

        Returns:
            requests.PreparedRequest: Request ready to send, merged with the
                session headers, cookies, auth and params.

        Raises:
            RequestConstructionError: If the URL is invalid or the body cannot
                be encoded as JSON.
        """
        headers = self._get_headers()
        data = None
        if body is not None:
            try:
                data = json.dumps(body, allow_nan=False).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise RequestConstructionError(
                    f"Failed to encode request body for {method} {path}: {e}",
                    {"method": method, "path": path},
                ) from e
            headers["Content-Type"] = "application/json"

        try:
            url = urljoin(self.base_url, path)
            return self.session.prepare_request(
                requests.Request(method, url, headers=headers, data=data)
            )
        except (requests.exceptions.RequestException, TypeError, ValueError) as e:
            raise RequestConstructionError(
                f"Invalid request URL for {method} {path}: {e}",
                {"method": method, "path": path},
            ) from e

    def execute(
        self,
        request: requests.PreparedRequest,
        decode: Callable[[Any], T] | None = None,
    ) -> T | None:
        """
        Send a request and decode its JSON response.

        The response is always closed before returning, including on errors.

        Args:
            request: Request built by build_request().
            decode: Converts the parsed JSON body into the result. If None,
                the body is ignored.

        Returns:
            The decoded result, or None if no decoder was given or the
            response was 204 No Content.

        Raises:
            TransportError: On network failure.
            APIError: If the response status is 400 or above.
            DecodeError: If the body is not valid JSON or has the wrong shape.
        """
        try:
            # Proxies and CA bundle from the environment
            settings = self.session.merge_environment_settings(request.url, {}, None, None, None)
            response = self.session.send(request, timeout=self.timeout, **settings)
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"Request to {request.url} failed: {e}",
                {"method": request.method, "url": request.url},
            ) from e

        with response:
            logger.debug(f"{request.method} {request.url} -> {response.status_code}")

            if response.status_code >= 400:
                raise self._api_error(response, request.url)

            if decode is None or response.status_code == 204:
                return None

            try:
                payload = json.loads(response.content, parse_float=Decimal)
                return decode(payload)
            except (KeyError, TypeError, ValueError, AttributeError, ArithmeticError) as e:
                raise DecodeError(
                    f"Failed to decode response from {request.url}: {e}",
                    {"url": request.url, "status_code": response.status_code},
                ) from e

    def _api_error(self, response: requests.Response, url: str | None) -> APIError:
        """Map a failed response to the matching APIError subclass."""
        status = response.status_code
        body = response.text or ""

        server_message = None
        try:
            error_body = json.loads(body) if body else None
        except ValueError:
            error_body = None
        if isinstance(error_body, dict):
            message = error_body.get("message") or error_body.get("error")
            if isinstance(message, str):
                server_message = message

        if status == 429:
            return RateLimitError(
                status,
                body,
                url,
                server_message,
                retry_after=_parse_retry_after(response.headers.get("Retry-After")),
            )
        if status in (401, 403):
            return AuthenticationError(status, body, url, server_message)
        if status == 404:
            return NotFoundError(status, body, url, server_message)
        return APIError(status, body, url, server_message)
