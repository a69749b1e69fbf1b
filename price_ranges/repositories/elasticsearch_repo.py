"""Elasticsearch repository implementation over the REST API."""

import logging
from typing import Any, Dict, Optional

import httpx

from price_ranges import config
from price_ranges.exceptions import SearchBackendError

logger = logging.getLogger(__name__)


class ElasticsearchRepository:
    """Elasticsearch implementation of the SearchRepository interface."""

    def __init__(
        self,
        base_url: str,
        index: str = config.DEFAULT_INDEX,
        timeout: float = config.REQUEST_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize Elasticsearch repository.

        Args:
            base_url: Elasticsearch URL (e.g., http://localhost:9200)
            index: Index holding the products (default: products)
            timeout: Request timeout in seconds
            client: Preconfigured httpx client (its base_url must be set)
        """
        self.base_url = base_url.rstrip("/")
        self.index = index
        self.client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            raise SearchBackendError(
                f"Search backend HTTP error on {method} {path}: {e.response.status_code} - {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise SearchBackendError(f"Search backend request {method} {path} failed: {e}") from e

    def index_exists(self) -> bool:
        try:
            response = self.client.head(f"/{self.index}")
        except httpx.HTTPError as e:
            raise SearchBackendError(f"Search backend request HEAD /{self.index} failed: {e}") from e
        if response.status_code == 404:
            return False
        if response.status_code >= 400:
            raise SearchBackendError(f"Search backend HTTP error on HEAD /{self.index}: {response.status_code}")
        return True

    def delete_index(self) -> None:
        logger.info(f"[Elasticsearch] Deleting index {self.index}")
        self._request("DELETE", f"/{self.index}")

    def create_index(self, mappings: Dict[str, Any], recreate: bool = True) -> None:
        """Create the index, dropping an existing one first when recreate is set.

        Args:
            mappings: Index mappings
            recreate: Whether to delete an existing index first
        """
        if recreate and self.index_exists():
            self.delete_index()

        logger.info(f"[Elasticsearch] Creating index {self.index}")
        self._request("PUT", f"/{self.index}", json={"mappings": mappings})

    def index_document(self, doc_id: str, document: Dict[str, Any], refresh: bool = True) -> None:
        """Index a document, making it searchable immediately when refresh is set."""
        params = {"refresh": "true"} if refresh else None
        self._request("PUT", f"/{self.index}/_doc/{doc_id}", json=document, params=params)

    def search(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Run a search against the index.

        Args:
            body: Search request body (query DSL)

        Returns:
            Decoded search response
        """
        logger.debug(f"[Elasticsearch] Searching {self.index}: {body}")
        response = self._request("POST", f"/{self.index}/_search", json=body)
        return response.json()
