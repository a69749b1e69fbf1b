"""Repository interface for search backend operations."""

from typing import Any, Dict, Protocol


class SearchRepository(Protocol):
    """Abstract interface for search backend operations on one index."""

    def search(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Run a search request and return the decoded response."""
        ...

    def create_index(self, mappings: Dict[str, Any], recreate: bool = True) -> None:
        """Create the index with the given mappings."""
        ...

    def index_document(self, doc_id: str, document: Dict[str, Any], refresh: bool = True) -> None:
        """Store a document under doc_id."""
        ...
