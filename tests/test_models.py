"""
Tests for GoCollect data models.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.gocollect_client.models import (
    ItemInsights,
    Metrics,
    SaleFormat,
    SearchItem,
    SoldExample,
    StagedSale,
    format_datetime,
    parse_datetime,
)
from tests.fixtures.gocollect_mocks import (
    SAMPLE_INSIGHTS,
    SAMPLE_SEARCH_ITEMS,
    SAMPLE_SOLD_EXAMPLE,
    SAMPLE_STAGED_SALE,
    sample,
)


class TestSaleFormat:
    """Tests for the SaleFormat enum."""

    def test_values(self) -> None:
        assert SaleFormat("auction") is SaleFormat.AUCTION
        assert SaleFormat("fixed_price") is SaleFormat.FIXED_PRICE
        assert SaleFormat.AUCTION == "auction"

    def test_unknown_format_rejected_at_construction(self) -> None:
        with pytest.raises(ValueError):
            StagedSale.from_api_response(sample(SAMPLE_STAGED_SALE, format="buy_it_now"))


class TestDatetimeHelpers:
    """Tests for RFC 3339 parsing and formatting."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2024-03-08T18:30:00Z", datetime(2024, 3, 8, 18, 30, tzinfo=timezone.utc)),
            ("2024-03-08T18:30:00+00:00", datetime(2024, 3, 8, 18, 30, tzinfo=timezone.utc)),
            ("2024-03-08T18:30:00.5Z", datetime(2024, 3, 8, 18, 30, 0, 500000, tzinfo=timezone.utc)),
            ("2024-03-08T18:30:00", datetime(2024, 3, 8, 18, 30, tzinfo=timezone.utc)),
        ],
    )
    def test_parse(self, text: str, expected: datetime) -> None:
        assert parse_datetime(text) == expected

    def test_parse_keeps_offset(self) -> None:
        parsed = parse_datetime("2024-03-08T13:30:00-05:00")
        assert parsed.utcoffset() == timedelta(hours=-5)
        assert parsed == datetime(2024, 3, 8, 18, 30, tzinfo=timezone.utc)

    def test_parse_none(self) -> None:
        assert parse_datetime(None) is None

    def test_parse_rejects_non_string(self) -> None:
        with pytest.raises(TypeError):
            parse_datetime(1709922600)

    def test_naive_datetime_formatted_as_utc(self) -> None:
        assert format_datetime(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05+00:00"
        assert format_datetime(None) is None


class TestSearchItem:
    """Tests for SearchItem parsing."""

    def test_variant_fields_optional(self) -> None:
        item = SearchItem.from_api_response(SAMPLE_SEARCH_ITEMS[0])
        assert item.variant_of_item_id is None
        assert item.variant_description is None

    def test_missing_name_raises(self) -> None:
        with pytest.raises(KeyError):
            SearchItem.from_api_response({"item_id": 1, "uuid": "u1", "slug": "x"})


class TestInsightsModels:
    """Tests for ItemInsights and Metrics."""

    def test_prices_are_decimal(self) -> None:
        metrics = Metrics(sold_count=3, low_price=10.1, high_price="20.20", average_price=15)
        assert metrics.low_price == Decimal("10.1")
        assert metrics.high_price == Decimal("20.20")
        assert metrics.average_price == Decimal("15")

    def test_zero_fmv_is_not_none(self) -> None:
        insights = ItemInsights.from_api_response(sample(SAMPLE_INSIGHTS, fmv=0))
        assert insights.fmv == Decimal("0")
        assert insights.fmv is not None

    def test_to_dict_round_trip(self) -> None:
        insights = ItemInsights.from_api_response(SAMPLE_INSIGHTS)
        assert ItemInsights.from_api_response(insights.to_dict()) == insights

    def test_bool_price_rejected(self) -> None:
        with pytest.raises(TypeError):
            Metrics(sold_count=1, low_price=True, high_price=1, average_price=1)


class TestSaleRecords:
    """Tests for SoldExample and StagedSale construction and encoding."""

    def test_sold_example_coerces_inputs(self) -> None:
        example = SoldExample(
            partner_sale_id="p1",
            cam="Comics",
            title="t",
            certification_company="CGC",
            listed_at="2024-01-01T00:00:00Z",
            sold_price=99.99,
            sold_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
            url="https://example.com",
            format="fixed_price",
        )
        assert example.sold_price == Decimal("99.99")
        assert example.listed_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert example.format is SaleFormat.FIXED_PRICE
        assert example.image_urls == []
        assert example.listed_price is None
        assert example.bid_count is None

    def test_sold_example_to_dict_keeps_all_fields(self) -> None:
        example = SoldExample.from_api_response(SAMPLE_SOLD_EXAMPLE)
        body = example.to_dict()
        assert set(body) == set(SAMPLE_SOLD_EXAMPLE)
        assert body["sold_at"] == "2024-03-08T18:30:00+00:00"
        assert body["format"] == "auction"

    def test_sold_example_round_trip(self) -> None:
        example = SoldExample.from_api_response(SAMPLE_SOLD_EXAMPLE)
        assert SoldExample.from_api_response(example.to_dict()) == example

    def test_staged_sale_round_trip_with_nulls(self) -> None:
        sale = StagedSale.from_api_response(SAMPLE_STAGED_SALE)
        body = sale.to_dict()
        assert set(body) == set(SAMPLE_STAGED_SALE)
        assert body["ends_at"] is None
        assert body["gocollect_item_id"] is None
        assert StagedSale.from_api_response(body) == sale

    def test_staged_sale_flags_default_false(self) -> None:
        payload = sample(SAMPLE_STAGED_SALE)
        del payload["is_active"]
        del payload["is_graded"]
        sale = StagedSale.from_api_response(payload)
        assert sale.is_active is False
        assert sale.is_graded is False
