"""
API schemas for user, cart, favorites and notification endpoints
"""

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from app.models.base import CamelModel
from app.models.notification import Notification
from app.models.user import CartItem


class UserRegister(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class AdminUserUpdate(ProfileUpdate):
    is_admin: Optional[bool] = None


class PasswordResetRequest(CamelModel):
    email: EmailStr


class PasswordReset(CamelModel):
    password: str = Field(..., min_length=1)


class EmailReset(CamelModel):
    email: EmailStr


class UserResponse(CamelModel):
    """Public view of a user (never exposes hashes or reset tokens)"""
    id: str = Field(..., alias="_id")
    name: str
    email: str
    is_admin: bool = False
    created_at: Optional[datetime] = None


class AuthResponse(UserResponse):
    token: str


class MessageResponse(CamelModel):
    message: str


class CartAdd(CamelModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


class CartQuantity(CamelModel):
    quantity: int = Field(..., ge=1)


class CartResponse(CamelModel):
    cart: List[CartItem]


class FavoriteAdd(CamelModel):
    product_id: str = Field(..., min_length=1)


class FavoritesResponse(CamelModel):
    favorite_products: List[str]


class NotificationCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)


class NotificationEnvelope(CamelModel):
    notification: Notification
