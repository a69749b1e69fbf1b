"""Tests for translating backend aggregation payloads."""

from decimal import Decimal

import pytest

from price_ranges import adapter
from price_ranges.exceptions import InvalidArgumentError
from price_ranges.models import PriceRangeBucket


def test_from_search_bucket_with_bounds():
    bucket = adapter.from_search_bucket({"key": "10.0-20.0", "from": 10.0, "to": 20.0, "doc_count": 3})

    assert bucket == PriceRangeBucket(from_=Decimal("10.00"), to=Decimal("20.00"), doc_count=3)


def test_from_search_bucket_missing_bounds_are_unbounded():
    """Test that omitted from/to keys map to unbounded sides."""
    first = adapter.from_search_bucket({"key": "*-10.0", "to": 10.0, "doc_count": 1})
    last = adapter.from_search_bucket({"key": "5000.0-*", "from": 5000.0, "doc_count": 0})

    assert first.from_ is None
    assert first.to == Decimal("10.00")
    assert last.from_ == Decimal("5000.00")
    assert last.to is None


def test_from_search_bucket_infinity_sentinels_are_unbounded():
    bucket = adapter.from_search_bucket({"from": float("-inf"), "to": float("inf"), "doc_count": 2})

    assert bucket.from_ is None
    assert bucket.to is None


def test_to_price_is_exact_currency_amount():
    """Test that float prices become exact cents, not binary expansions."""
    assert adapter.to_price(39.98) == Decimal("39.98")
    assert adapter.to_price(39.98).as_tuple().exponent == -2
    assert adapter.to_price("250") == Decimal("250.00")
    assert adapter.to_price("-Infinity") is None


@pytest.mark.parametrize("value", ["abc", float("nan")])
def test_to_price_rejects_invalid_values(value):
    with pytest.raises(InvalidArgumentError):
        adapter.to_price(value)


def test_from_search_bucket_requires_doc_count():
    with pytest.raises(InvalidArgumentError, match="doc_count"):
        adapter.from_search_bucket({"from": 10.0, "to": 20.0})


def test_collapse_search_buckets_luggage(range_response, luggage_prices):
    """Test collapsing the raw granular buckets of the Luggage category."""
    raw_buckets = adapter.extract_range_buckets(range_response(luggage_prices))
    assert len(raw_buckets) == 40

    collapsed = adapter.collapse_search_buckets(raw_buckets, 3)

    assert len(collapsed) == 3
    assert collapsed[0].to == Decimal("80.00")
    assert collapsed[0].doc_count == 6
    assert collapsed[1].from_ == Decimal("80.00")
    assert collapsed[1].to == Decimal("250.00")
    assert collapsed[1].doc_count == 2
    assert collapsed[2].from_ == Decimal("250.00")
    assert collapsed[2].doc_count == 1


def test_to_response_buckets():
    buckets = [
        PriceRangeBucket(from_=None, to=Decimal("80.00"), doc_count=6),
        PriceRangeBucket(from_=Decimal("80.00"), to=Decimal("250.00"), doc_count=2),
        PriceRangeBucket(from_=Decimal("250.00"), to=None, doc_count=1),
    ]

    assert adapter.to_response_buckets(buckets) == [
        {"key": "*-80.00", "to": "80.00", "doc_count": 6},
        {"key": "80.00-250.00", "from": "80.00", "to": "250.00", "doc_count": 2},
        {"key": "250.00-*", "from": "250.00", "doc_count": 1},
    ]


def test_extract_range_buckets_keyed_form():
    response = {
        "aggregations": {
            "price_ranges": {
                "buckets": {
                    "*-100.0": {"to": 100.0, "doc_count": 6},
                    "100.0-*": {"from": 100.0, "doc_count": 3},
                }
            }
        }
    }

    raw = adapter.extract_range_buckets(response)

    assert [b["doc_count"] for b in raw] == [6, 3]


def test_extract_range_buckets_missing_aggregation():
    with pytest.raises(InvalidArgumentError, match="price_ranges"):
        adapter.extract_range_buckets({"hits": {"hits": []}})


def test_extract_percentiles_dict_and_list_forms():
    keyed = {"aggregations": {"price_percentiles": {"values": {"20.0": 30.5, "80.0": None}}}}
    listed = {"aggregations": {"price_percentiles": {"values": [{"key": 20.0, "value": 30.5}]}}}

    assert adapter.extract_percentiles(keyed) == {20.0: 30.5, 80.0: None}
    assert adapter.extract_percentiles(listed) == {20.0: 30.5}
