"""Search request bodies for price range aggregations."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Sequence

from price_ranges import config
from price_ranges.exceptions import InvalidArgumentError


def category_query(category: str) -> Dict[str, Any]:
    """Match products of a single category."""
    return {"match": {config.CATEGORY_FIELD: category}}


def range_aggregation(edges: Sequence[Decimal], field: str = config.PRICE_FIELD) -> Dict[str, Any]:
    """Build a range aggregation covering the whole price axis.

    The first range is unbounded below and ends at edges[0], the last one
    starts at edges[-1] and is unbounded above.

    Args:
        edges: Strictly ascending range boundaries
        field: Numeric field to aggregate on

    Returns:
        Range aggregation definition
    """
    if not edges:
        raise InvalidArgumentError("At least one range edge is required")
    for lower, upper in zip(edges, edges[1:]):
        if not lower < upper:
            raise InvalidArgumentError(f"Range edges must be strictly ascending: {list(edges)}")

    ranges: List[Dict[str, float]] = [{"to": float(edges[0])}]
    for lower, upper in zip(edges, edges[1:]):
        ranges.append({"from": float(lower), "to": float(upper)})
    ranges.append({"from": float(edges[-1])})

    return {"range": {"field": field, "ranges": ranges}}


def percentiles_aggregation(
    percents: Sequence[float] = config.PERCENTILES,
    field: str = config.PRICE_FIELD,
) -> Dict[str, Any]:
    return {"percentiles": {"field": field, "percents": list(percents)}}


def search_body(
    category: str,
    aggregations: Dict[str, Any],
    size: Optional[int] = None,
) -> Dict[str, Any]:
    """Build a category search carrying the given aggregations.

    Args:
        category: Product category to match
        aggregations: Aggregation name -> definition
        size: Number of hits to return (None keeps the backend default)
    """
    body: Dict[str, Any] = {
        "query": category_query(category),
        "aggs": aggregations,
    }
    if size is not None:
        body["size"] = size
    return body


def percentile_edges(
    percentile_values: Dict[float, Optional[float]],
    percents: Sequence[float] = config.EDGE_PERCENTILES,
) -> List[Decimal]:
    """Turn percentile prices into range edges.

    Each selected percentile is rounded half up to the nearest 10 and
    duplicates are dropped, keeping the first occurrence.

    Args:
        percentile_values: Percentile -> price, as returned by the backend
        percents: Percentiles to use as edges

    Returns:
        Distinct edges in percentile order
    """
    edges: List[Decimal] = []
    for percent in percents:
        value = percentile_values.get(float(percent))
        if value is None:
            continue
        steps = (Decimal(str(value)) / config.PERCENTILE_ROUNDING).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        edge = (steps * config.PERCENTILE_ROUNDING).quantize(config.PRICE_QUANTUM)
        if edge not in edges:
            edges.append(edge)
    return edges
