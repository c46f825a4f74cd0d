"""
Dependencies module initialization
"""

from .auth import get_current_user, require_admin, require_self_or_admin
from .services import (
    get_cart_service,
    get_notification_service,
    get_order_service,
    get_product_service,
    get_user_service,
)

__all__ = [
    "get_current_user",
    "require_admin",
    "require_self_or_admin",
    "get_cart_service",
    "get_notification_service",
    "get_order_service",
    "get_product_service",
    "get_user_service",
]
