"""
Collectibles service: catalog item search.
"""

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from src.gocollect_client.models import SearchItem

if TYPE_CHECKING:
    from src.gocollect_client.api_client import GoCollectClient

SEARCH_PATH = "/api/collectibles/v1/item/search"


def _decode_search_items(data: Any) -> list[SearchItem]:
    if not isinstance(data, list):
        raise TypeError(f"Expected a JSON array of items, got {type(data).__name__}")
    return [SearchItem.from_api_response(item) for item in data]


class CollectiblesService:
    """Handles the collectible item endpoints."""

    def __init__(self, client: "GoCollectClient") -> None:
        self.client = client

    def search_items(
        self,
        query: str,
        cam: str | None = None,
        limit: int | None = None,
    ) -> list[SearchItem]:
        """
        Search the catalog for collectible items.

        Args:
            query: Search text (e.g. "Hulk #181"). Always sent.
            cam: Optional category filter (e.g. "Comics").
            limit: Maximum number of results; only sent when positive.

        Returns:
            List[SearchItem]: Matching items in the order the API returned them.
        """
        params = {"query": query}
        if cam:
            params["cam"] = cam
        if limit is not None and limit > 0:
            params["limit"] = str(limit)

        path = f"{SEARCH_PATH}?{urlencode(params)}"
        request = self.client.build_request("GET", path)
        return self.client.execute(request, _decode_search_items)
