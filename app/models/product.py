"""
Product and review models
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.models.base import CamelModel, DocumentModel, utc_now


class Review(CamelModel):
    """A single customer review embedded in a product"""
    name: str
    rating: float = Field(..., ge=0, le=5)
    comment: Optional[str] = None
    user: str
    created_at: datetime = Field(default_factory=utc_now)


class Product(DocumentModel):
    """Catalog product with its embedded reviews"""

    user: Optional[str] = None  # creator
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    price: float = 0
    count_in_stock: int = 0

    # Derived from reviews on every review write
    rating: float = 0
    num_reviews: int = 0
    reviews: List[Review] = Field(default_factory=list)

    def has_review_from(self, user_id: str) -> bool:
        return any(review.user == user_id for review in self.reviews)

    def add_review(self, review: Review) -> None:
        """Append a review and recompute the aggregate rating"""
        self.reviews.append(review)
        self.num_reviews = len(self.reviews)
        self.rating = sum(r.rating for r in self.reviews) / self.num_reviews
