"""
Authentication dependencies for FastAPI
Provides JWT token validation and user loading
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from app.core.logger import logger
from app.core.security import AuthError, decode_token
from app.dependencies.services import get_user_repository
from app.models.user import User
from app.repositories.user import UserRepository


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    authorization: Optional[str] = Header(None),
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Dependency to extract the bearer token and load its user.
    Raises 401 if authentication fails.

    Usage:
        @router.post("/")
        async def create_item(user: User = Depends(get_current_user)):
            pass
    """
    if not authorization:
        logger.warning("Authentication required: No token provided")
        raise _unauthorized("Not authorized, no token")

    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token.strip():
        raise _unauthorized("Not authorized, token failed")

    try:
        payload = decode_token(token.strip())
    except AuthError as e:
        logger.warning(f"Authentication failed: {e.message}", metadata={"event": "auth_failed"})
        raise _unauthorized(e.message)

    user_id = payload.get("id")
    if not user_id:
        logger.warning("Invalid token: Missing user ID", metadata={"event": "auth_failed"})
        raise _unauthorized("Not authorized, token failed")

    user = await repository.get_by_id(user_id)
    if not user:
        logger.warning(f"Token for unknown user {user_id}", metadata={"event": "auth_failed"})
        raise _unauthorized("Not authorized, user not found")

    logger.debug(f"Authentication successful for user: {user_id}")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """
    Dependency to require the admin flag.

    Usage:
        @router.delete("/{id}")
        async def delete_item(user: User = Depends(require_admin)):
            pass
    """
    if not user.is_admin:
        logger.warning(f"Admin access denied for user: {user.id}", metadata={"event": "admin_denied"})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized as an admin",
        )
    return user


async def require_self_or_admin(user_id: str, user: User = Depends(get_current_user)) -> User:
    """Caller must be the user named in the path, or an admin"""
    if user.id != user_id and not user.is_admin:
        logger.warning(
            f"User {user.id} denied access to user {user_id}",
            metadata={"event": "user_access_denied"}
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this user",
        )
    return user
