"""Test fixtures and configuration."""

from bisect import bisect_right
from decimal import Decimal
from unittest.mock import Mock

import pytest

from price_ranges import config
from price_ranges.models import Product
from price_ranges.repository import SearchRepository


@pytest.fixture
def mock_repository():
    """Create a mocked search repository for testing."""
    repo = Mock(spec=SearchRepository)
    repo.search = Mock(return_value={})
    repo.create_index = Mock(return_value=None)
    repo.index_document = Mock(return_value=None)
    return repo


@pytest.fixture
def luggage_products():
    """Luggage catalog; the EverVanz backpack is listed twice under the same id."""
    evervanz = Product(
        id="evervanz", name="EverVanz Unisex Roll Top Waterproof Hiking Backpack",
        price=Decimal("32.29"), category="Luggage",
    )
    return [
        Product(id="jansport", name="JanSport Driver 8 Wheeled Backpack", price=Decimal("78.60"), category="Luggage"),
        Product(id="caribee", name="Caribee Sky Master 70 Travel Pack", price=Decimal("205.60"), category="Luggage"),
        Product(id="outdoor", name="Outdoor Runway 33 Trolley Rucksack", price=Decimal("134.44"), category="Luggage"),
        Product(id="casual", name="Casual Universal Backpack", price=Decimal("21.52"), category="Luggage"),
        Product(id="gusti", name="Gusti Leder nature Rucksack", price=Decimal("55.81"), category="Luggage"),
        evervanz,
        evervanz,
        Product(id="gfavor", name="G-FAVOR Canvas Leather Backpack", price=Decimal("39.98"), category="Luggage"),
        Product(id="augur", name="AUGUR Casual Backpack", price=Decimal("32.99"), category="Luggage"),
        Product(id="bridge", name="The Bridge Story Donna Leather Backpack", price=Decimal("418.60"), category="Luggage"),
    ]


@pytest.fixture
def luggage_prices(luggage_products):
    """Prices of the distinct indexed luggage documents."""
    return [product.price for product in {p.id: p for p in luggage_products}.values()]


@pytest.fixture
def range_response():
    """Build a backend-style range aggregation response for prices and edges."""

    def build(prices, edges=config.GRANULAR_PRICE_EDGES, name=config.PRICE_RANGES_AGG):
        counts = [0] * (len(edges) + 1)
        for price in prices:
            counts[bisect_right(edges, price)] += 1

        buckets = []
        for i, count in enumerate(counts):
            bucket = {"doc_count": count}
            if i > 0:
                bucket["from"] = float(edges[i - 1])
            if i < len(edges):
                bucket["to"] = float(edges[i])
            lower = bucket.get("from", "*")
            upper = bucket.get("to", "*")
            bucket["key"] = f"{lower}-{upper}"
            buckets.append(bucket)

        return {
            "hits": {"total": {"value": len(prices), "relation": "eq"}, "hits": []},
            "aggregations": {name: {"buckets": buckets}},
        }

    return build
