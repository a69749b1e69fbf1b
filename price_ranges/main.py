"""CLI entry point for the price range pipeline (for local testing)."""

import json
import logging
import os
from pathlib import Path

from price_ranges import config
from price_ranges.models import Product
from price_ranges.pipeline import create_products_index, index_products, run_pipeline
from price_ranges.repositories.elasticsearch_repo import ElasticsearchRepository


def load_products(path: str | Path) -> list[Product]:
    """Load products from a JSON file holding a list of product objects."""
    with open(path, "r") as f:
        return [Product.model_validate(item) for item in json.load(f)]


def main(argv=None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Price Range Aggregation")
    parser.add_argument(
        "--elasticsearch-url",
        type=str,
        default=os.getenv(config.ELASTICSEARCH_URL_ENV),
        help=f"Elasticsearch URL (or set {config.ELASTICSEARCH_URL_ENV})",
    )
    parser.add_argument(
        "--index",
        type=str,
        default=os.getenv(config.PRODUCTS_INDEX_ENV, config.DEFAULT_INDEX),
        help=f"Products index (default: {config.DEFAULT_INDEX})",
    )
    parser.add_argument(
        "--category",
        type=str,
        required=True,
        help="Product category to aggregate",
    )
    parser.add_argument(
        "--buckets",
        type=int,
        default=int(os.getenv(config.BUCKET_COUNT_ENV, config.DEFAULT_BUCKET_COUNT)),
        help=f"Number of collapsed buckets (default: {config.DEFAULT_BUCKET_COUNT})",
    )
    parser.add_argument(
        "--mode",
        choices=config.MODES,
        default="collapsed",
        help="Aggregation mode (default: collapsed)",
    )
    parser.add_argument(
        "--seed-file",
        type=str,
        help="JSON file with products to index before aggregating (recreates the index)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress verbose output",
    )

    args = parser.parse_args(argv)

    if not args.elasticsearch_url:
        raise ValueError(f"--elasticsearch-url required (or set {config.ELASTICSEARCH_URL_ENV} env var)")

    logging.basicConfig(level=logging.WARNING if args.quiet else logging.INFO)

    with ElasticsearchRepository(base_url=args.elasticsearch_url, index=args.index) as repository:
        if args.seed_file:
            create_products_index(repository, verbose=not args.quiet)
            index_products(repository, load_products(args.seed_file), verbose=not args.quiet)

        response = run_pipeline(
            repository=repository,
            category=args.category,
            mode=args.mode,
            bucket_count=args.buckets,
            verbose=not args.quiet,
        )

    print(json.dumps(response.model_dump(), indent=2))
    return response


if __name__ == "__main__":
    main()
