"""Cloud Function entry point for price range aggregations."""

import logging
import os
from typing import Dict, Any

import functions_framework

from price_ranges import config
from price_ranges.exceptions import EmptyDistributionError, InvalidArgumentError, SearchBackendError
from price_ranges.pipeline import run_pipeline
from price_ranges.repositories.elasticsearch_repo import ElasticsearchRepository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@functions_framework.http
def get_price_ranges(request) -> tuple[Dict[str, Any], int]:
    """HTTP endpoint returning price range buckets for a product category.

    Query parameters:
    - category: Product category (required)
    - mode: static, percentiles or collapsed (default: collapsed)
    - buckets: Number of collapsed buckets (default: PRICE_RANGE_BUCKETS or 3)

    Args:
        request: Flask request object

    Returns:
        Tuple of (response dict, status code)
    """
    try:
        elasticsearch_url = os.getenv(config.ELASTICSEARCH_URL_ENV)
        if not elasticsearch_url:
            return {"error": f"{config.ELASTICSEARCH_URL_ENV} not configured"}, 500

        category = request.args.get("category")
        if not category:
            return {"error": "Missing category"}, 400

        mode = request.args.get("mode", "collapsed")
        buckets_param = request.args.get("buckets", os.getenv(config.BUCKET_COUNT_ENV, str(config.DEFAULT_BUCKET_COUNT)))
        try:
            bucket_count = int(buckets_param)
        except ValueError:
            return {"error": f"Invalid buckets value: {buckets_param}"}, 400

        index = os.getenv(config.PRODUCTS_INDEX_ENV, config.DEFAULT_INDEX)
        repository = ElasticsearchRepository(base_url=elasticsearch_url, index=index)

        try:
            logger.info(f"Computing {mode} price ranges for category '{category}' (buckets={bucket_count})")
            response = run_pipeline(
                repository=repository,
                category=category,
                mode=mode,
                bucket_count=bucket_count,
                verbose=True,
            )
        finally:
            repository.close()

        return response.model_dump(), 200

    except InvalidArgumentError as e:
        logger.warning(f"Invalid price range request: {e}")
        return {"error": str(e)}, 400
    except EmptyDistributionError as e:
        logger.info(f"No priced items to aggregate: {e}")
        return {"error": str(e)}, 404
    except SearchBackendError as e:
        logger.error(f"Search backend error: {e}", exc_info=True)
        return {"error": str(e)}, 502
    except Exception as e:
        logger.error(f"Error computing price ranges: {e}", exc_info=True)
        return {"error": "Internal server error"}, 500
