"""
User repository
"""

from typing import Dict, Iterable, List, Optional

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user accounts"""

    model_class = User
    duplicate_messages = {"creation": "User already exists", "update": "Email already in use"}

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self.find_one({"email": email})

    async def email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        existing = await self.find_by_email(email)
        return existing is not None and existing.id != exclude_id

    async def find_by_password_reset_token(self, token: str) -> Optional[User]:
        return await self.find_one({"passwordResetToken": token})

    async def find_by_email_reset_token(self, token: str) -> Optional[User]:
        return await self.find_one({"emailResetToken": token})

    async def list_all(self) -> List[User]:
        return await self.find_many({})

    async def find_by_ids(self, user_ids: Iterable[str]) -> Dict[str, User]:
        """Batch lookup keyed by user id (unknown or malformed ids are skipped)"""
        object_ids = [oid for oid in (self._to_object_id(uid) for uid in set(user_ids)) if oid]
        if not object_ids:
            return {}
        users = await self.find_many({"_id": {"$in": object_ids}})
        return {user.id: user for user in users}
