"""
Staged sales service: submit and fetch active or scheduled listings.
"""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from src.gocollect_client.models import StagedSale

if TYPE_CHECKING:
    from src.gocollect_client.api_client import GoCollectClient

STAGED_SALES_PATH = "/api/resources/v1/staged-sales"


def _decode_staged_sale(body: Any) -> StagedSale:
    return StagedSale.from_api_response(body["data"])


class StagedSalesService:
    """Handles the staged sales endpoints."""

    def __init__(self, client: "GoCollectClient") -> None:
        self.client = client

    def create_staged_sale(self, sale: StagedSale) -> None:
        """Submit a staged sale. Invalid fields are rejected by the API."""
        request = self.client.build_request("POST", STAGED_SALES_PATH, sale.to_dict())
        self.client.execute(request)

    def get_staged_sale(self, sale_id: str) -> StagedSale:
        """
        Fetch a staged sale by its partner sale ID.

        Args:
            sale_id: Partner-assigned sale ID.

        Returns:
            StagedSale: The stored listing.
        """
        path = f"{STAGED_SALES_PATH}/{quote(str(sale_id), safe='')}"
        request = self.client.build_request("GET", path)
        return self.client.execute(request, _decode_staged_sale)
