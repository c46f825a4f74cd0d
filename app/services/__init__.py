"""
Services module initialization
"""

from .cart import CartService
from .notification import NotificationService
from .order import OrderService
from .product import ProductService
from .user import UserService

__all__ = [
    "CartService",
    "NotificationService",
    "OrderService",
    "ProductService",
    "UserService",
]
