"""
Notification repository
"""

from typing import List

from pymongo import DESCENDING

from app.models.notification import Notification
from app.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for user notifications"""

    model_class = Notification

    async def list_by_ids(self, notification_ids: List[str]) -> List[Notification]:
        object_ids = [oid for oid in map(self._to_object_id, notification_ids) if oid]
        if not object_ids:
            return []
        return await self.find_many({"_id": {"$in": object_ids}}, sort=[("_id", DESCENDING)])
