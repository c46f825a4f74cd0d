"""
Product repository for data access layer following Repository pattern
"""

import re
from typing import List, Optional, Tuple

from pymongo import DESCENDING

from app.models.product import Product
from app.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Repository for product data access operations"""

    model_class = Product

    @staticmethod
    def _keyword_query(keyword: Optional[str]) -> dict:
        """Case-insensitive substring match on the product name"""
        if keyword and keyword.strip():
            return {"name": {"$regex": re.escape(keyword.strip()), "$options": "i"}}
        return {}

    async def find_by_name(self, name: str) -> Optional[Product]:
        return await self.find_one({"name": name})

    async def list_page(
        self,
        keyword: Optional[str],
        page: int,
        page_size: int,
        sort_field: str = "_id",
    ) -> Tuple[List[Product], int]:
        """One page of products matching the keyword, plus the total match count"""
        query = self._keyword_query(keyword)
        total = await self.count(query)
        sort = [(sort_field, DESCENDING)]
        if sort_field != "_id":
            # stable order between products with the same sort value
            sort.append(("_id", DESCENDING))
        products = await self.find_many(
            query,
            sort=sort,
            skip=page_size * (page - 1),
            limit=page_size,
        )
        return products, total

    async def list_all(self) -> List[Product]:
        return await self.find_many({}, sort=[("_id", DESCENDING)])
