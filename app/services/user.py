"""
User account service: registration, login, profile and credential resets
"""

from typing import Any, Dict, List

from app.core.errors import ErrorResponse
from app.core.logger import logger
from app.core.security import (
    generate_reset_token,
    generate_token,
    hash_password,
    verify_password,
)
from app.models.base import as_utc, utc_now
from app.models.user import User
from app.repositories.user import UserRepository
from app.schemas.user import AdminUserUpdate, ProfileUpdate, UserRegister

INVALID_CREDENTIALS = "Invalid email or password"
INVALID_RESET_TOKEN = "Invalid or expired token"


def auth_payload(user: User) -> Dict[str, Any]:
    """Public user fields plus a freshly issued token"""
    return {
        "_id": user.id,
        "name": user.name,
        "email": user.email,
        "isAdmin": user.is_admin,
        "createdAt": user.created_at,
        "token": generate_token(user.id),
    }


class UserService:
    """Service layer for user accounts"""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def get_user(self, user_id: str) -> User:
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise ErrorResponse("User not found", status_code=404)
        return user

    async def register(self, data: UserRegister) -> Dict[str, Any]:
        if await self.repository.find_by_email(data.email):
            raise ErrorResponse("User already exists", status_code=400)

        user = User(
            name=data.name,
            email=data.email,
            password=hash_password(data.password),
        )
        user = await self.repository.insert(user)

        logger.info(
            f"Registered user {user.id}",
            metadata={"event": "register_user", "user_id": user.id}
        )
        return auth_payload(user)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Unknown e-mail and wrong password fail identically"""
        user = await self.repository.find_by_email(email)
        if not user or not verify_password(password, user.password):
            logger.warning("Failed login attempt", metadata={"event": "login_failed"})
            raise ErrorResponse(INVALID_CREDENTIALS, status_code=401)

        logger.info("User logged in", user_id=user.id, metadata={"event": "login"})
        return auth_payload(user)

    async def _apply_update(self, user: User, data: ProfileUpdate) -> User:
        if data.email and data.email != user.email:
            if await self.repository.email_taken(data.email, exclude_id=user.id):
                raise ErrorResponse("Email already in use", status_code=400)
            user.email = data.email
        if data.name:
            user.name = data.name
        if data.password:
            user.password = hash_password(data.password)
        return user

    async def update_profile(self, user_id: str, data: ProfileUpdate) -> Dict[str, Any]:
        user = await self._apply_update(await self.get_user(user_id), data)
        user = await self.repository.save(user)

        logger.info("Profile updated", user_id=user.id, metadata={"event": "update_profile"})
        return auth_payload(user)

    async def update_user(self, user_id: str, data: AdminUserUpdate) -> User:
        """Admin update of another account"""
        user = await self._apply_update(await self.get_user(user_id), data)
        if data.is_admin is not None:
            user.is_admin = data.is_admin
        user = await self.repository.save(user)

        logger.info(
            f"Admin updated user {user_id}",
            metadata={"event": "admin_update_user", "user_id": user_id}
        )
        return user

    async def list_users(self) -> List[User]:
        return await self.repository.list_all()

    async def delete_user(self, user_id: str) -> None:
        await self.get_user(user_id)
        await self.repository.delete(user_id)
        logger.info(f"Deleted user {user_id}", metadata={"event": "delete_user", "user_id": user_id})

    async def request_password_reset(self, email: str) -> str:
        """
        Store a reset token on the account and return it.
        Delivering the token to the user is left to the mail integration.
        """
        user = await self.repository.find_by_email(email)
        if not user:
            raise ErrorResponse("User not found", status_code=404)

        user.password_reset_token, user.password_reset_expires = generate_reset_token()
        await self.repository.save(user)

        logger.info("Password reset requested", user_id=user.id, metadata={"event": "password_reset_requested"})
        return user.password_reset_token

    async def reset_password(self, token: str, password: str) -> None:
        user = await self.repository.find_by_password_reset_token(token)
        if not user or not _token_is_live(user.password_reset_expires):
            raise ErrorResponse(INVALID_RESET_TOKEN, status_code=400)

        user.password = hash_password(password)
        user.password_reset_token = None
        user.password_reset_expires = None
        await self.repository.save(user)

        logger.info("Password reset completed", user_id=user.id, metadata={"event": "password_reset"})

    async def request_email_reset(self, user_id: str) -> str:
        user = await self.get_user(user_id)
        user.email_reset_token, user.email_reset_expires = generate_reset_token()
        await self.repository.save(user)

        logger.info("Email reset requested", user_id=user.id, metadata={"event": "email_reset_requested"})
        return user.email_reset_token

    async def reset_email(self, token: str, email: str) -> None:
        user = await self.repository.find_by_email_reset_token(token)
        if not user or not _token_is_live(user.email_reset_expires):
            raise ErrorResponse(INVALID_RESET_TOKEN, status_code=400)
        if await self.repository.email_taken(email, exclude_id=user.id):
            raise ErrorResponse("Email already in use", status_code=400)

        user.email = email
        user.email_reset_token = None
        user.email_reset_expires = None
        await self.repository.save(user)

        logger.info("Email reset completed", user_id=user.id, metadata={"event": "email_reset"})


def _token_is_live(expires) -> bool:
    return expires is not None and as_utc(expires) > utc_now()
