"""
Repositories module initialization
"""

from .base import BaseRepository
from .notification import NotificationRepository
from .order import OrderRepository
from .product import ProductRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "NotificationRepository",
    "OrderRepository",
    "ProductRepository",
    "UserRepository",
]
