"""Collapse granular price range aggregations into a few balanced buckets."""

from price_ranges.collapser import collapse
from price_ranges.exceptions import (
    EmptyDistributionError,
    InvalidArgumentError,
    PriceRangeError,
    SearchBackendError,
)
from price_ranges.models import PriceRangeBucket

__all__ = [
    "collapse",
    "PriceRangeBucket",
    "PriceRangeError",
    "InvalidArgumentError",
    "EmptyDistributionError",
    "SearchBackendError",
]
