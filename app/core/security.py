"""
Token issuing/verification and password hashing
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt
from passlib.context import CryptContext

from app.core.config import config
from app.core.logger import logger

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=config.bcrypt_rounds,
)


class AuthError(Exception):
    """Raised when a bearer token cannot be trusted"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def generate_token(user_id: str, expires_in: Optional[int] = None) -> str:
    """Sign a bearer token carrying the user id and an expiry"""
    lifetime = expires_in if expires_in is not None else config.jwt_expiration
    now = datetime.now(timezone.utc)
    payload = {
        "id": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=lifetime),
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_token(token: str) -> dict:
    """
    Decode and validate a JWT.

    Raises:
        AuthError: If the token is invalid or expired
    """
    try:
        return jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthError("Not authorized, token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {str(e)}", metadata={"event": "invalid_token"})
        raise AuthError("Not authorized, token failed")


def generate_reset_token() -> Tuple[str, datetime]:
    """Random single-use token and its expiry for password/e-mail resets"""
    token = secrets.token_hex(20)
    expires = datetime.now(timezone.utc) + timedelta(seconds=config.reset_token_ttl)
    return token, expires
