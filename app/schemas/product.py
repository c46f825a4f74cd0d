"""
API schemas for Product endpoints following FastAPI best practices
"""

from typing import List, Optional
from pydantic import Field

from app.models.base import CamelModel
from app.models.product import Product


class ProductCreate(CamelModel):
    """Schema for creating a new product"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    image: Optional[str] = None
    price: float = Field(0, ge=0)
    count_in_stock: int = Field(0, ge=0)


class ProductUpdate(CamelModel):
    """Schema for updating a product; omitted or falsy fields keep their value"""
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    image: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    count_in_stock: Optional[int] = Field(None, ge=0)


class ReviewCreate(CamelModel):
    rating: float = Field(..., ge=0, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class ProductListResponse(CamelModel):
    """Response schema for paginated product listings"""
    products: List[Product]
    page: int
    pages: int
