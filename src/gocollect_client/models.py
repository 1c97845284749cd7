"""
Data models for GoCollect API requests and responses.

Contains typed dataclasses for parsing API responses and building request bodies.
Prices are Decimal; timestamps are timezone-aware datetimes.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

# Fractional seconds beyond microseconds (Go emits up to nanoseconds)
_FRACTION_RE = re.compile(r"(\.\d{1,6})\d*")


def _to_decimal(value: Any) -> Decimal | None:
    """Coerce a JSON number, float or string into Decimal, keeping None."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Expected a price, got {value!r}")
    return Decimal(str(value))


def _decimal_to_json(value: Decimal | None) -> float | None:
    if value is None:
        return None
    return float(value)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """
    Parse an RFC 3339 timestamp as returned by the API.

    Accepts a trailing "Z" and fractional seconds of any precision.
    Naive values are assumed to be UTC.

    Args:
        value: Timestamp string, datetime, or None.

    Returns:
        Timezone-aware datetime, or None.

    Raises:
        ValueError: If the string is not a valid timestamp.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif not isinstance(value, str):
        raise TypeError(f"Expected an RFC 3339 timestamp, got {value!r}")
    else:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        text = _FRACTION_RE.sub(lambda m: m.group(1).ljust(7, "0"), text, count=1)
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_datetime(value: datetime | None) -> str | None:
    """Format a datetime as RFC 3339, treating naive values as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class SaleFormat(str, Enum):
    """How a sale was or is being conducted."""

    AUCTION = "auction"
    FIXED_PRICE = "fixed_price"


@dataclass
class SearchItem:
    """
    Catalog entry returned by item search.

    Attributes:
        item_id: Numeric GoCollect item ID.
        uuid: Stable external identifier.
        slug: URL slug.
        name: Display name.
        variant_of_item_id: Parent item ID when this entry is a variant.
        variant_description: Description of the variant, if any.
    """

    item_id: int
    uuid: str
    slug: str
    name: str
    variant_of_item_id: int | None = None
    variant_description: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "SearchItem":
        return cls(
            item_id=int(data["item_id"]),
            uuid=data["uuid"],
            slug=data["slug"],
            name=data["name"],
            variant_of_item_id=data.get("variant_of_item_id"),
            variant_description=data.get("variant_description"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_id": self.item_id,
            "uuid": self.uuid,
            "slug": self.slug,
            "name": self.name,
            "variant_of_item_id": self.variant_of_item_id,
            "variant_description": self.variant_description,
        }


@dataclass
class Metrics:
    """
    Sales metrics for one time window.

    Attributes:
        sold_count: Number of sales in the window.
        low_price: Lowest sale price.
        high_price: Highest sale price.
        average_price: Average sale price.
    """

    sold_count: int
    low_price: Decimal
    high_price: Decimal
    average_price: Decimal

    def __post_init__(self) -> None:
        self.low_price = _to_decimal(self.low_price)
        self.high_price = _to_decimal(self.high_price)
        self.average_price = _to_decimal(self.average_price)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Metrics":
        return cls(
            sold_count=int(data["sold_count"]),
            low_price=data["low_price"],
            high_price=data["high_price"],
            average_price=data["average_price"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "sold_count": self.sold_count,
            "low_price": _decimal_to_json(self.low_price),
            "high_price": _decimal_to_json(self.high_price),
            "average_price": _decimal_to_json(self.average_price),
        }


@dataclass
class ItemInsights:
    """
    Valuation snapshot for one item, grade, company and label.

    Attributes:
        item_id: GoCollect item ID.
        title: Item title.
        issue_number: Issue number.
        cam: Category code (e.g. "Comics").
        company: Certification company.
        label: Label tier.
        grade: Grade string (e.g. "9.8").
        metrics: Metrics keyed by time window in days ("30", "90", "365").
        fmv: Fair market value; None when there is not enough sales data.
    """

    item_id: int
    title: str
    issue_number: str
    cam: str
    company: str
    label: str
    grade: str
    metrics: dict[str, Metrics] = field(default_factory=dict)
    fmv: Decimal | None = None

    def __post_init__(self) -> None:
        self.fmv = _to_decimal(self.fmv)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "ItemInsights":
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object for insights, got {type(data).__name__}")
        raw_metrics = data.get("metrics") or {}
        if not isinstance(raw_metrics, dict):
            raise TypeError(f"Expected metrics to be a JSON object, got {type(raw_metrics).__name__}")
        return cls(
            item_id=int(data["item_id"]),
            title=data["title"],
            issue_number=data["issue_number"],
            cam=data["cam"],
            company=data["company"],
            label=data["label"],
            grade=data["grade"],
            metrics={
                str(window): Metrics.from_api_response(values)
                for window, values in raw_metrics.items()
            },
            fmv=data.get("fmv"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_id": self.item_id,
            "title": self.title,
            "issue_number": self.issue_number,
            "cam": self.cam,
            "company": self.company,
            "label": self.label,
            "grade": self.grade,
            "metrics": {window: m.to_dict() for window, m in self.metrics.items()},
            "fmv": _decimal_to_json(self.fmv),
        }


@dataclass
class SoldExample:
    """
    A completed sale submitted by a partner.

    Attributes:
        partner_sale_id: Partner-assigned unique sale ID.
        cam: Category code.
        title: Listing title.
        image_urls: Image URLs for the listing.
        gocollect_item_id: Matching GoCollect item ID, if known.
        certification_company: Grading company (e.g. "CGC").
        certification_key: Certification number, if any.
        listed_price: Original asking price, if any.
        listed_at: When the item was listed.
        sold_price: Final sale price.
        sold_at: When the sale completed.
        url: Source URL of the sale.
        format: Auction or fixed price.
        auction_name: Auction name, for auction sales.
        bid_count: Number of bids, for auction sales.
    """

    partner_sale_id: str
    cam: str
    title: str
    certification_company: str
    listed_at: datetime
    sold_price: Decimal
    sold_at: datetime
    url: str
    format: SaleFormat
    image_urls: list[str] = field(default_factory=list)
    gocollect_item_id: int | None = None
    certification_key: str | None = None
    listed_price: Decimal | None = None
    auction_name: str | None = None
    bid_count: int | None = None

    def __post_init__(self) -> None:
        self.format = SaleFormat(self.format)
        self.sold_price = _to_decimal(self.sold_price)
        self.listed_price = _to_decimal(self.listed_price)
        self.listed_at = parse_datetime(self.listed_at)
        self.sold_at = parse_datetime(self.sold_at)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "SoldExample":
        """
        Create SoldExample from API response.

        Args:
            data: The object inside the response's "data" envelope.

        Returns:
            SoldExample: Parsed sale record.
        """
        return cls(
            partner_sale_id=data["partner_sale_id"],
            cam=data["cam"],
            title=data["title"],
            image_urls=list(data.get("image_urls") or []),
            gocollect_item_id=data.get("gocollect_item_id"),
            certification_company=data["certification_company"],
            certification_key=data.get("certification_key"),
            listed_price=data.get("listed_price"),
            listed_at=data["listed_at"],
            sold_price=data["sold_price"],
            sold_at=data["sold_at"],
            url=data["url"],
            format=data["format"],
            auction_name=data.get("auction_name"),
            bid_count=data.get("bid_count"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Build the JSON request body."""
        return {
            "partner_sale_id": self.partner_sale_id,
            "cam": self.cam,
            "title": self.title,
            "image_urls": list(self.image_urls),
            "gocollect_item_id": self.gocollect_item_id,
            "certification_company": self.certification_company,
            "certification_key": self.certification_key,
            "listed_price": _decimal_to_json(self.listed_price),
            "listed_at": format_datetime(self.listed_at),
            "sold_price": _decimal_to_json(self.sold_price),
            "sold_at": format_datetime(self.sold_at),
            "url": self.url,
            "format": self.format.value,
            "auction_name": self.auction_name,
            "bid_count": self.bid_count,
        }


@dataclass
class StagedSale:
    """
    A listing that is active or scheduled (not yet sold).

    Attributes:
        partner_sale_id: Partner-assigned unique sale ID.
        cam: Category code.
        title: Listing title.
        is_active: Whether the listing is currently live.
        image_urls: Image URLs for the listing.
        gocollect_item_id: Matching GoCollect item ID, if known.
        is_graded: Whether the item is graded.
        certification_company: Grading company.
        certification_key: Certification number, if any.
        listed_price: Original asking price, if any.
        price: Current price or bid, if any.
        sold_at: Sale timestamp.
        url: Listing URL.
        format: Auction or fixed price.
        auction_name: Auction name, for auction listings.
        ends_at: Listing end; None for listings without a defined end.
    """

    partner_sale_id: str
    cam: str
    title: str
    certification_company: str
    sold_at: datetime
    url: str
    format: SaleFormat
    is_active: bool = False
    is_graded: bool = False
    image_urls: list[str] = field(default_factory=list)
    gocollect_item_id: int | None = None
    certification_key: str | None = None
    listed_price: Decimal | None = None
    price: Decimal | None = None
    auction_name: str | None = None
    ends_at: datetime | None = None

    def __post_init__(self) -> None:
        self.format = SaleFormat(self.format)
        self.listed_price = _to_decimal(self.listed_price)
        self.price = _to_decimal(self.price)
        self.sold_at = parse_datetime(self.sold_at)
        self.ends_at = parse_datetime(self.ends_at)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "StagedSale":
        return cls(
            partner_sale_id=data["partner_sale_id"],
            cam=data["cam"],
            title=data["title"],
            is_active=bool(data.get("is_active", False)),
            image_urls=list(data.get("image_urls") or []),
            gocollect_item_id=data.get("gocollect_item_id"),
            is_graded=bool(data.get("is_graded", False)),
            certification_company=data["certification_company"],
            certification_key=data.get("certification_key"),
            listed_price=data.get("listed_price"),
            price=data.get("price"),
            sold_at=data["sold_at"],
            url=data["url"],
            format=data["format"],
            auction_name=data.get("auction_name"),
            ends_at=data.get("ends_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Build the JSON request body."""
        return {
            "partner_sale_id": self.partner_sale_id,
            "cam": self.cam,
            "title": self.title,
            "is_active": self.is_active,
            "image_urls": list(self.image_urls),
            "gocollect_item_id": self.gocollect_item_id,
            "is_graded": self.is_graded,
            "certification_company": self.certification_company,
            "certification_key": self.certification_key,
            "listed_price": _decimal_to_json(self.listed_price),
            "price": _decimal_to_json(self.price),
            "sold_at": format_datetime(self.sold_at),
            "url": self.url,
            "format": self.format.value,
            "auction_name": self.auction_name,
            "ends_at": format_datetime(self.ends_at),
        }
