"""
Insights service: pricing metrics and fair market value for one item.

An item can be looked up by its GoCollect item ID or by a CGC certification ID.
"""

from typing import TYPE_CHECKING
from urllib.parse import quote, urlencode

from src.gocollect_client.models import ItemInsights

if TYPE_CHECKING:
    from src.gocollect_client.api_client import GoCollectClient

INSIGHTS_PATH = "/api/insights/v1/item"


def _insights_params(grade: str, company: str | None, label: str | None) -> str:
    params = {"grade": grade}
    if company:
        params["company"] = company
    if label:
        params["label"] = label
    return urlencode(params)


class InsightsService:
    """Handles the item insights endpoints."""

    def __init__(self, client: "GoCollectClient") -> None:
        self.client = client

    def get_item_insights(
        self,
        item_id: int,
        grade: str,
        company: str | None = None,
        label: str | None = None,
    ) -> ItemInsights:
        """
        Get insights for an item by GoCollect item ID.

        Args:
            item_id: GoCollect item ID.
            grade: Grade to report on (e.g. "9.8"). Always sent.
            company: Optional certification company filter.
            label: Optional label filter.

        Returns:
            ItemInsights: Metrics per time window and FMV.
        """
        path = f"{INSIGHTS_PATH}/{int(item_id)}?{_insights_params(grade, company, label)}"
        request = self.client.build_request("GET", path)
        return self.client.execute(request, ItemInsights.from_api_response)

    def get_item_insights_by_cgc_id(
        self,
        cgc_id: str,
        grade: str,
        company: str | None = None,
        label: str | None = None,
    ) -> ItemInsights:
        """
        Get insights for an item by CGC certification ID.

        Same contract as get_item_insights(); only the lookup key differs.
        """
        encoded_id = quote(str(cgc_id), safe="")
        path = f"{INSIGHTS_PATH}/cgc-id/{encoded_id}?{_insights_params(grade, company, label)}"
        request = self.client.build_request("GET", path)
        return self.client.execute(request, ItemInsights.from_api_response)
