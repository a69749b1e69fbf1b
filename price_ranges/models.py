"""Pydantic models for price range buckets, products and responses."""

from decimal import Decimal
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


class PriceRangeBucket(BaseModel):
    """A half-open price range [from, to) and the number of items inside it.

    A missing bound means the range is unbounded on that side.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: Optional[Decimal] = Field(None, alias="from", description="Inclusive lower bound")
    to: Optional[Decimal] = Field(None, description="Exclusive upper bound")
    doc_count: int = Field(..., ge=0, description="Number of documents in the range")


class Product(BaseModel):
    """A product stored in the search index."""
    id: str
    name: str
    price: Decimal
    category: str

    def to_document(self) -> Dict[str, Any]:
        """Return the JSON document indexed for this product."""
        return {
            "name": self.name,
            "price": float(self.price),
            "category": self.category,
        }


class PriceRangesResponse(BaseModel):
    """Response body of the price ranges endpoint."""
    category: str
    mode: str
    buckets: List[Dict[str, Any]] = Field(default_factory=list)
