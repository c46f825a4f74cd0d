"""
Models module initialization
"""

from .base import CamelModel, DocumentModel, utc_now
from .notification import Notification
from .order import Order, OrderItem, PaymentResult, ShippingAddress
from .product import Product, Review
from .user import CartItem, User

__all__ = [
    "CamelModel",
    "DocumentModel",
    "utc_now",
    "Notification",
    "Order",
    "OrderItem",
    "PaymentResult",
    "ShippingAddress",
    "Product",
    "Review",
    "CartItem",
    "User",
]
