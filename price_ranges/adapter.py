"""Translation between search backend aggregation payloads and price range buckets."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

from price_ranges import config
from price_ranges.collapser import collapse
from price_ranges.exceptions import InvalidArgumentError
from price_ranges.models import PriceRangeBucket

logger = logging.getLogger(__name__)


def to_price(value: Any) -> Optional[Decimal]:
    """Convert a backend bound to a currency Decimal.

    Missing bounds and infinity sentinels map to None (unbounded).

    Args:
        value: Number, numeric string, None, or +/- infinity

    Returns:
        Decimal quantized to the currency unit, or None if unbounded
    """
    if value is None:
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise InvalidArgumentError(f"Invalid price bound: {value!r}")
    if price.is_infinite():
        return None
    if price.is_nan():
        raise InvalidArgumentError(f"Invalid price bound: {value!r}")
    return price.quantize(config.PRICE_QUANTUM)


def from_search_bucket(raw: Dict[str, Any]) -> PriceRangeBucket:
    """Build a PriceRangeBucket from one range aggregation bucket.

    Args:
        raw: Bucket dict as returned by the search backend, e.g.
            {"key": "10.0-20.0", "from": 10.0, "to": 20.0, "doc_count": 3}

    Returns:
        Canonical bucket
    """
    if "doc_count" not in raw:
        raise InvalidArgumentError(f"Range bucket has no doc_count: {raw}")
    return PriceRangeBucket(
        from_=to_price(raw.get("from")),
        to=to_price(raw.get("to")),
        doc_count=int(raw["doc_count"]),
    )


def from_search_buckets(raw_buckets: Sequence[Dict[str, Any]]) -> List[PriceRangeBucket]:
    return [from_search_bucket(raw) for raw in raw_buckets]


def collapse_search_buckets(
    raw_buckets: Sequence[Dict[str, Any]],
    target_count: int,
) -> List[PriceRangeBucket]:
    """Convert backend range buckets and collapse them to target_count buckets."""
    return collapse(from_search_buckets(raw_buckets), target_count)


def bucket_key(bucket: PriceRangeBucket) -> str:
    """Label a bucket the way range aggregations do, e.g. "*-80.00"."""
    lower = "*" if bucket.from_ is None else str(bucket.from_)
    upper = "*" if bucket.to is None else str(bucket.to)
    return f"{lower}-{upper}"


def to_response_buckets(buckets: Sequence[PriceRangeBucket]) -> List[Dict[str, Any]]:
    """Render buckets as JSON-friendly dicts.

    Unbounded sides are omitted, like in backend responses. Bounds are
    rendered as strings so no precision is lost.
    """
    rendered = []
    for bucket in buckets:
        item: Dict[str, Any] = {"key": bucket_key(bucket)}
        if bucket.from_ is not None:
            item["from"] = str(bucket.from_)
        if bucket.to is not None:
            item["to"] = str(bucket.to)
        item["doc_count"] = bucket.doc_count
        rendered.append(item)
    return rendered


def _get_aggregation(response: Dict[str, Any], name: str) -> Dict[str, Any]:
    aggregation = (response.get("aggregations") or {}).get(name)
    if aggregation is None:
        raise InvalidArgumentError(f"Aggregation '{name}' missing from search response")
    return aggregation


def extract_range_buckets(response: Dict[str, Any], name: str = config.PRICE_RANGES_AGG) -> List[Dict[str, Any]]:
    """Return the raw buckets of a range aggregation in range order.

    Handles both the list form and the keyed (dict) form of the buckets.
    """
    buckets = _get_aggregation(response, name).get("buckets", [])
    if isinstance(buckets, dict):
        return list(buckets.values())
    return list(buckets)


def extract_percentiles(
    response: Dict[str, Any],
    name: str = config.PRICE_PERCENTILES_AGG,
) -> Dict[float, Optional[float]]:
    """Return percentile -> value from a percentiles aggregation.

    Values are None when the backend had no documents to compute them from.
    """
    values = _get_aggregation(response, name).get("values", {})
    if isinstance(values, list):
        return {float(item["key"]): item.get("value") for item in values}
    return {float(key): value for key, value in values.items()}
