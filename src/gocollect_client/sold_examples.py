"""
Sold examples service: submit and fetch completed sales.
"""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from src.gocollect_client.models import SoldExample

if TYPE_CHECKING:
    from src.gocollect_client.api_client import GoCollectClient

SOLD_EXAMPLES_PATH = "/api/resources/v1/sold-examples"


def _decode_sold_example(body: Any) -> SoldExample:
    # Single records come wrapped as {"data": {...}}
    return SoldExample.from_api_response(body["data"])


class SoldExamplesService:
    """Handles the sold examples endpoints."""

    def __init__(self, client: "GoCollectClient") -> None:
        self.client = client

    def create_sold_example(self, example: SoldExample) -> None:
        """
        Submit a completed sale.

        Field values are not validated locally; the API rejects invalid
        submissions with an APIError.

        Args:
            example: The sale to submit.
        """
        request = self.client.build_request("POST", SOLD_EXAMPLES_PATH, example.to_dict())
        self.client.execute(request)

    def get_sold_example(self, partner_sale_id: str) -> SoldExample:
        """
        Fetch a sold example by partner sale ID.

        Args:
            partner_sale_id: Partner-assigned sale ID.

        Returns:
            SoldExample: The stored sale.
        """
        path = f"{SOLD_EXAMPLES_PATH}/{quote(str(partner_sale_id), safe='')}"
        request = self.client.build_request("GET", path)
        return self.client.execute(request, _decode_sold_example)
