"""Pipeline execution logic for price range aggregations."""

import logging
from decimal import Decimal
from typing import Iterable, List, Sequence

from price_ranges import adapter, config, queries
from price_ranges.collapser import collapse
from price_ranges.exceptions import InvalidArgumentError
from price_ranges.models import PriceRangeBucket, PriceRangesResponse, Product

logger = logging.getLogger(__name__)


def create_products_index(repository, verbose: bool = True) -> None:
    """(Re)create the products index.

    Args:
        repository: Repository instance (implements SearchRepository protocol)
        verbose: Whether to log progress
    """
    if verbose:
        logger.info("[Price Ranges] Creating products index...")
    repository.create_index(config.PRODUCTS_MAPPING, recreate=True)


def index_products(repository, products: Iterable[Product], verbose: bool = True) -> int:
    """Index products so they are immediately searchable.

    Args:
        repository: Repository instance (implements SearchRepository protocol)
        products: Products to index; a repeated id overwrites the earlier document
        verbose: Whether to log progress

    Returns:
        Number of index requests sent
    """
    count = 0
    for product in products:
        repository.index_document(product.id, product.to_document(), refresh=True)
        count += 1
    if verbose:
        logger.info(f"[Price Ranges] Indexed {count} product(s)")
    return count


def _range_buckets(repository, category: str, edges: Sequence[Decimal]) -> List[PriceRangeBucket]:
    body = queries.search_body(
        category,
        {config.PRICE_RANGES_AGG: queries.range_aggregation(edges)},
    )
    response = repository.search(body)
    return adapter.from_search_buckets(adapter.extract_range_buckets(response))


def static_price_ranges(
    repository,
    category: str,
    edges: Sequence[Decimal] = config.STATIC_PRICE_EDGES,
    verbose: bool = True,
) -> List[PriceRangeBucket]:
    """Aggregate a category's prices into fixed price ranges."""
    if verbose:
        logger.info(f"[Price Ranges] Static aggregation for category '{category}' with edges {list(edges)}")
    return _range_buckets(repository, category, edges)


def percentile_price_ranges(repository, category: str, verbose: bool = True) -> List[PriceRangeBucket]:
    """Aggregate a category's prices into ranges derived from its price percentiles.

    Two searches are made: the first one fetches the price percentiles, the
    second one counts documents in ranges bounded by the quintile prices.

    Returns:
        Buckets of the second search, or [] when fewer than
        config.MIN_PERCENTILE_EDGES distinct edges were found
    """
    if verbose:
        logger.info(f"[Price Ranges] Fetching price percentiles for category '{category}'")
    percentiles_body = queries.search_body(
        category,
        {config.PRICE_PERCENTILES_AGG: queries.percentiles_aggregation()},
        size=0,
    )
    response = repository.search(percentiles_body)
    edges = queries.percentile_edges(adapter.extract_percentiles(response))

    if len(edges) < config.MIN_PERCENTILE_EDGES:
        if verbose:
            logger.info(f"[Price Ranges] Only {len(edges)} distinct percentile edge(s), skipping range aggregation")
        return []

    if verbose:
        logger.info(f"[Price Ranges] Range aggregation with percentile edges {edges}")
    return _range_buckets(repository, category, edges)


def collapsed_price_ranges(
    repository,
    category: str,
    bucket_count: int = config.DEFAULT_BUCKET_COUNT,
    edges: Sequence[Decimal] = config.GRANULAR_PRICE_EDGES,
    verbose: bool = True,
) -> List[PriceRangeBucket]:
    """Aggregate a category's prices into granular ranges and collapse them.

    Args:
        repository: Repository instance (implements SearchRepository protocol)
        category: Product category
        bucket_count: Number of buckets wanted
        edges: Edges of the granular ranges
        verbose: Whether to log progress

    Returns:
        At most bucket_count buckets
    """
    if bucket_count < 1:
        raise InvalidArgumentError(f"bucket_count must be >= 1, got {bucket_count}")
    if verbose:
        logger.info(
            f"[Price Ranges] Granular aggregation for category '{category}' "
            f"({len(edges) + 1} ranges, collapsing to {bucket_count})"
        )
    buckets = _range_buckets(repository, category, edges)
    collapsed = collapse(buckets, bucket_count)
    if verbose:
        logger.info(f"[Price Ranges] Collapsed into {len(collapsed)} bucket(s)")
    return collapsed


def run_pipeline(
    repository,
    category: str,
    mode: str = "collapsed",
    bucket_count: int = config.DEFAULT_BUCKET_COUNT,
    verbose: bool = True,
) -> PriceRangesResponse:
    """Compute price ranges for a category.

    Args:
        repository: Repository instance (implements SearchRepository protocol)
        category: Product category
        mode: "static", "percentiles" or "collapsed"
        bucket_count: Number of buckets for the collapsed mode
        verbose: Whether to log progress

    Returns:
        Response with the rendered buckets
    """
    if mode == "static":
        buckets = static_price_ranges(repository, category, verbose=verbose)
    elif mode == "percentiles":
        buckets = percentile_price_ranges(repository, category, verbose=verbose)
    elif mode == "collapsed":
        buckets = collapsed_price_ranges(repository, category, bucket_count=bucket_count, verbose=verbose)
    else:
        raise InvalidArgumentError(f"Unknown mode '{mode}', expected one of {', '.join(config.MODES)}")

    return PriceRangesResponse(
        category=category,
        mode=mode,
        buckets=adapter.to_response_buckets(buckets),
    )
