"""
GoCollect API client module.

Provides a client for the GoCollect collectibles-pricing API:
item search, pricing insights, sold examples and staged sales.
"""

from src.gocollect_client.api_client import (
    DEFAULT_BASE_URL,
    GoCollectClient,
    __version__,
)
from src.gocollect_client.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    GoCollectError,
    NotFoundError,
    RateLimitError,
    RequestConstructionError,
    TransportError,
)
from src.gocollect_client.models import (
    ItemInsights,
    Metrics,
    SaleFormat,
    SearchItem,
    SoldExample,
    StagedSale,
)

__all__ = [
    "GoCollectClient",
    "DEFAULT_BASE_URL",
    "__version__",
    "GoCollectError",
    "ConfigurationError",
    "RequestConstructionError",
    "TransportError",
    "APIError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "DecodeError",
    "SearchItem",
    "Metrics",
    "ItemInsights",
    "SaleFormat",
    "SoldExample",
    "StagedSale",
]
