"""
Order repository
"""

from typing import List

from pymongo import DESCENDING

from app.models.order import Order
from app.repositories.base import BaseRepository


class OrderRepository(BaseRepository[Order]):
    """Repository for customer orders"""

    model_class = Order

    async def list_by_user(self, user_id: str) -> List[Order]:
        return await self.find_many({"user": user_id}, sort=[("_id", DESCENDING)])

    async def list_all(self) -> List[Order]:
        return await self.find_many({}, sort=[("_id", DESCENDING)])
