# config.py
"""Configuration constants for the price range pipeline."""
from decimal import Decimal

# Environment
ELASTICSEARCH_URL_ENV = "ELASTICSEARCH_URL"
PRODUCTS_INDEX_ENV = "PRODUCTS_INDEX"
BUCKET_COUNT_ENV = "PRICE_RANGE_BUCKETS"

DEFAULT_INDEX = "products"
DEFAULT_BUCKET_COUNT = 3
REQUEST_TIMEOUT = 10.0          # Seconds per search backend call

# Index fields and aggregation names
PRICE_FIELD = "price"
CATEGORY_FIELD = "category"
PRICE_RANGES_AGG = "price_ranges"
PRICE_PERCENTILES_AGG = "price_percentiles"

# Prices are stored as scaled_float with a factor of 100, i.e. cents
PRICE_QUANTUM = Decimal("0.01")
PRICE_SCALING_FACTOR = 100

PRODUCTS_MAPPING = {
    "properties": {
        "name": {"type": "text"},
        PRICE_FIELD: {"type": "scaled_float", "scaling_factor": PRICE_SCALING_FACTOR},
        CATEGORY_FIELD: {"type": "keyword"},
    }
}

# Range edges
STATIC_PRICE_EDGES = [Decimal(100), Decimal(200)]

# 39 edges -> 40 buckets, finer where most prices fall
GRANULAR_PRICE_EDGES = (
    [Decimal(v) for v in range(10, 201, 10)]
    + [Decimal(v) for v in range(250, 501, 50)]
    + [Decimal(v) for v in range(600, 1001, 100)]
    + [Decimal(v) for v in range(1500, 5001, 500)]
)

# Percentiles
PERCENTILES = [10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0, 90.0]
EDGE_PERCENTILES = [20.0, 40.0, 60.0, 80.0]   # Quintile boundaries used as range edges
PERCENTILE_ROUNDING = Decimal(10)             # Round percentile prices to the nearest 10
MIN_PERCENTILE_EDGES = 3                      # Fewer distinct edges are not worth a second query

MODES = ("static", "percentiles", "collapsed")
