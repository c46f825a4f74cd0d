"""
Product service containing business logic layer
"""

import math
from typing import Any, Dict, List, Optional

from app.core.config import config
from app.core.errors import ErrorResponse
from app.core.logger import logger
from app.models.product import Product, Review
from app.models.user import User
from app.repositories.product import ProductRepository
from app.schemas.product import ProductCreate, ProductUpdate, ReviewCreate


class ProductService:
    """Service layer for product business logic"""

    def __init__(self, repository: ProductRepository, page_size: Optional[int] = None):
        self.repository = repository
        self.page_size = page_size or config.products_page_size

    async def get_products(
        self,
        keyword: Optional[str] = None,
        page_number: int = 1,
        top_rated: bool = False,
    ) -> Dict[str, Any]:
        """Paginated product listing, newest first or by rating"""
        page = max(page_number, 1)
        sort_field = "rating" if top_rated else "_id"

        products, total_count = await self.repository.list_page(
            keyword, page, self.page_size, sort_field
        )
        pages = math.ceil(total_count / self.page_size)

        logger.info(
            f"Fetched {len(products)} products",
            metadata={
                "event": "top_rated_products" if top_rated else "list_products",
                "count": len(products),
                "total": total_count,
                "keyword": keyword,
                "page": page,
            }
        )

        return {"products": products, "page": page, "pages": pages}

    async def get_all_products(self) -> List[Product]:
        return await self.repository.list_all()

    async def get_product(self, product_id: str) -> Product:
        product = await self.repository.get_by_id(product_id)
        if not product:
            raise ErrorResponse("Product not found", status_code=404)
        return product

    async def create_product(self, product_data: ProductCreate, created_by: str) -> Product:
        """Create a new product, rejecting duplicate names"""
        if await self.repository.find_by_name(product_data.name):
            raise ErrorResponse("Product name already exists", status_code=400)

        product = Product(user=created_by, **product_data.model_dump())
        return await self.repository.insert(product)

    async def update_product(self, product_id: str, product_data: ProductUpdate) -> Product:
        """Partial update: omitted or falsy fields retain their prior value"""
        product = await self.get_product(product_id)

        for field, value in product_data.model_dump().items():
            if value:
                setattr(product, field, value)

        product = await self.repository.save(product)
        logger.info(
            f"Updated product {product_id}",
            metadata={"event": "update_product", "product_id": product_id}
        )
        return product

    async def add_review(self, product_id: str, review_data: ReviewCreate, user: User) -> Product:
        """Append a review (one per user) and recompute the aggregate rating"""
        product = await self.get_product(product_id)

        if product.has_review_from(user.id):
            raise ErrorResponse("Product already reviewed", status_code=400)

        product.add_review(
            Review(
                name=user.name,
                rating=review_data.rating,
                comment=review_data.comment,
                user=user.id,
            )
        )
        product = await self.repository.save(product)

        logger.info(
            f"Added review for product {product_id} by user {user.id}",
            metadata={
                "event": "add_review",
                "product_id": product_id,
                "user_id": user.id,
                "rating": product.rating,
                "num_reviews": product.num_reviews,
            }
        )
        return product

    async def delete_product(self, product_id: str) -> None:
        await self.get_product(product_id)
        if not await self.repository.delete(product_id):
            raise ErrorResponse("Product not found", status_code=404)

        logger.info(
            f"Deleted product {product_id}",
            metadata={"event": "delete_product", "product_id": product_id}
        )
