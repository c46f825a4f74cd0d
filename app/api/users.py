"""
User API endpoints: accounts, credentials, cart, favorites, notifications
and the per-user order views
"""

from typing import List

from fastapi import APIRouter, Depends, Request, status

from app.core.config import config
from app.core.errors import ErrorResponseModel
from app.core.logger import logger
from app.core.rate_limit import limiter
from app.dependencies.auth import get_current_user, require_admin, require_self_or_admin
from app.dependencies.services import (
    get_cart_service,
    get_notification_service,
    get_order_service,
    get_user_service,
)
from app.models.notification import Notification
from app.models.order import Order
from app.models.user import User
from app.schemas.user import (
    AdminUserUpdate,
    AuthResponse,
    CartAdd,
    CartQuantity,
    CartResponse,
    EmailReset,
    FavoriteAdd,
    FavoritesResponse,
    LoginRequest,
    MessageResponse,
    NotificationCreate,
    NotificationEnvelope,
    PasswordReset,
    PasswordResetRequest,
    ProfileUpdate,
    UserRegister,
    UserResponse,
)
from app.services.cart import CartService
from app.services.notification import NotificationService
from app.services.order import OrderService
from app.services.user import UserService

router = APIRouter()


# Accounts and credentials
@router.post(
    "",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}},
)
async def register_user(
    data: UserRegister,
    service: UserService = Depends(get_user_service),
):
    """Register a new account and return it with a bearer token"""
    return await service.register(data)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponseModel}, 429: {"model": ErrorResponseModel}},
)
@limiter.limit(config.login_rate_limit)
async def login(
    request: Request,
    credentials: LoginRequest,
    service: UserService = Depends(get_user_service),
):
    return await service.login(credentials.email, credentials.password)


@router.post("/logout", response_model=MessageResponse)
async def logout():
    """Tokens are stateless; the client discards its copy"""
    return {"message": "User logged out successfully"}


@router.get("/profile", response_model=UserResponse)
async def get_profile(user: User = Depends(get_current_user)):
    return user


@router.put(
    "/profile",
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponseModel}},
)
async def update_profile(
    data: ProfileUpdate,
    service: UserService = Depends(get_user_service),
    user: User = Depends(get_current_user),
):
    """Partial profile update; answers with a freshly issued token"""
    return await service.update_profile(user.id, data)


@router.get("", response_model=List[UserResponse])
async def list_users(
    service: UserService = Depends(get_user_service),
    _: User = Depends(require_admin),
):
    return await service.list_users()


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponseModel}},
)
async def request_password_reset(
    data: PasswordResetRequest,
    service: UserService = Depends(get_user_service),
):
    await service.request_password_reset(data.email)
    return {"message": "Password reset email sent"}


@router.put(
    "/reset-password/{token}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponseModel}},
)
async def reset_password(
    token: str,
    data: PasswordReset,
    service: UserService = Depends(get_user_service),
):
    await service.reset_password(token, data.password)
    return {"message": "Password reset successful"}


@router.post("/reset-email", response_model=MessageResponse)
async def request_email_reset(
    service: UserService = Depends(get_user_service),
    user: User = Depends(get_current_user),
):
    await service.request_email_reset(user.id)
    return {"message": "Email reset email sent"}


@router.put(
    "/reset-email/{token}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponseModel}},
)
async def reset_email(
    token: str,
    data: EmailReset,
    service: UserService = Depends(get_user_service),
):
    await service.reset_email(token, data.email)
    return {"message": "Email reset successful"}


# Admin account management
@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def update_user(
    user_id: str,
    data: AdminUserUpdate,
    service: UserService = Depends(get_user_service),
    _: User = Depends(require_admin),
):
    return await service.update_user(user_id, data)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponseModel}},
)
async def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
    admin: User = Depends(require_admin),
):
    await service.delete_user(user_id)
    logger.info(
        f"User {user_id} removed by admin {admin.id}",
        metadata={"event": "admin_delete_user", "user_id": user_id}
    )
    return {"message": "User removed"}


# Cart
@router.get("/{user_id}/cart", response_model=CartResponse)
async def get_cart(
    user_id: str,
    service: CartService = Depends(get_cart_service),
    _: User = Depends(require_self_or_admin),
):
    return {"cart": await service.get_cart(user_id)}


@router.post("/{user_id}/cart", response_model=CartResponse)
async def add_to_cart(
    user_id: str,
    item: CartAdd,
    service: CartService = Depends(get_cart_service),
    _: User = Depends(require_self_or_admin),
):
    """Adding a product already in the cart increases its quantity"""
    return {"cart": await service.add_to_cart(user_id, item.product_id, item.quantity)}


@router.put(
    "/{user_id}/cart/{product_id}",
    response_model=CartResponse,
    responses={404: {"model": ErrorResponseModel}},
)
async def update_cart_item(
    user_id: str,
    product_id: str,
    data: CartQuantity,
    service: CartService = Depends(get_cart_service),
    _: User = Depends(require_self_or_admin),
):
    return {"cart": await service.update_cart_item(user_id, product_id, data.quantity)}


@router.delete(
    "/{user_id}/cart/{product_id}",
    response_model=CartResponse,
    responses={404: {"model": ErrorResponseModel}},
)
async def remove_from_cart(
    user_id: str,
    product_id: str,
    service: CartService = Depends(get_cart_service),
    _: User = Depends(require_self_or_admin),
):
    return {"cart": await service.remove_from_cart(user_id, product_id)}


# Favorites
@router.get("/{user_id}/favorites", response_model=FavoritesResponse)
async def get_favorites(
    user_id: str,
    service: CartService = Depends(get_cart_service),
    _: User = Depends(require_self_or_admin),
):
    return {"favorite_products": await service.get_favorites(user_id)}


@router.post("/{user_id}/favorites", response_model=FavoritesResponse)
async def add_favorite(
    user_id: str,
    data: FavoriteAdd,
    service: CartService = Depends(get_cart_service),
    _: User = Depends(require_self_or_admin),
):
    return {"favorite_products": await service.add_favorite(user_id, data.product_id)}


@router.delete("/{user_id}/favorites/{product_id}", response_model=FavoritesResponse)
async def remove_favorite(
    user_id: str,
    product_id: str,
    service: CartService = Depends(get_cart_service),
    _: User = Depends(require_self_or_admin),
):
    return {"favorite_products": await service.remove_favorite(user_id, product_id)}


# Notifications
@router.post(
    "/{user_id}/notifications",
    response_model=Notification,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponseModel}},
)
async def send_notification(
    user_id: str,
    data: NotificationCreate,
    service: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_admin),
):
    return await service.send(user_id, data.title, data.message)


@router.get("/{user_id}/notifications", response_model=List[Notification])
async def list_notifications(
    user_id: str,
    service: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_self_or_admin),
):
    return await service.list_for_user(user_id)


@router.get(
    "/{user_id}/notifications/{notification_id}",
    response_model=NotificationEnvelope,
    responses={404: {"model": ErrorResponseModel}},
)
async def get_notification(
    user_id: str,
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_self_or_admin),
):
    return {"notification": await service.get(user_id, notification_id)}


@router.delete(
    "/{user_id}/notifications/{notification_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponseModel}},
)
async def delete_notification(
    user_id: str,
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_self_or_admin),
):
    await service.delete(user_id, notification_id)
    return {"message": "Notification deleted successfully"}


# Orders placed by a user
@router.get(
    "/{user_id}/orders",
    response_model=List[Order],
    responses={404: {"model": ErrorResponseModel}},
)
async def list_user_orders(
    user_id: str,
    service: OrderService = Depends(get_order_service),
    _: User = Depends(require_self_or_admin),
):
    return await service.list_for_user(user_id)


@router.delete(
    "/{user_id}/orders/{order_id}",
    response_model=MessageResponse,
    responses={403: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def delete_user_order(
    user_id: str,
    order_id: str,
    service: OrderService = Depends(get_order_service),
    _: User = Depends(require_self_or_admin),
):
    await service.delete_for_user(user_id, order_id)
    return {"message": "Order deleted successfully"}
