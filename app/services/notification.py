"""
Notification service
"""

from typing import List

from app.core.errors import ErrorResponse
from app.core.logger import logger
from app.models.notification import Notification
from app.models.user import User
from app.repositories.notification import NotificationRepository
from app.repositories.user import UserRepository


class NotificationService:
    """Notifications live in their own collection and are referenced from the user"""

    def __init__(self, repository: NotificationRepository, user_repository: UserRepository):
        self.repository = repository
        self.user_repository = user_repository

    async def _get_user(self, user_id: str) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise ErrorResponse("User not found", status_code=404)
        return user

    async def send(self, user_id: str, title: str, message: str) -> Notification:
        user = await self._get_user(user_id)

        notification = await self.repository.insert(
            Notification(title=title, message=message, user=user_id)
        )
        user.notifications.append(notification.id)
        try:
            await self.user_repository.save(user)
        except ErrorResponse:
            # nothing references the document once the user write fails
            await self.repository.delete(notification.id)
            logger.warning(
                "Notification rolled back",
                user_id=user_id,
                metadata={"event": "notification_rolled_back", "notification_id": notification.id}
            )
            raise

        logger.info(
            "Notification sent",
            user_id=user_id,
            metadata={"event": "notification_sent", "notification_id": notification.id}
        )
        return notification

    async def list_for_user(self, user_id: str) -> List[Notification]:
        user = await self._get_user(user_id)
        return await self.repository.list_by_ids(user.notifications)

    async def get(self, user_id: str, notification_id: str) -> Notification:
        user = await self._get_user(user_id)
        if notification_id not in user.notifications:
            raise ErrorResponse("Notification not found", status_code=404)

        notification = await self.repository.get_by_id(notification_id)
        if not notification:
            raise ErrorResponse("Notification not found", status_code=404)
        return notification

    async def delete(self, user_id: str, notification_id: str) -> None:
        user = await self._get_user(user_id)
        if notification_id not in user.notifications:
            raise ErrorResponse("Notification not found", status_code=404)

        user.notifications.remove(notification_id)
        await self.user_repository.save(user)
        await self.repository.delete(notification_id)

        logger.info(
            "Notification deleted",
            user_id=user_id,
            metadata={"event": "notification_deleted", "notification_id": notification_id}
        )
