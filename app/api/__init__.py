"""
API module initialization
"""

from . import health, home, operational, orders, products, users

__all__ = ["health", "home", "operational", "orders", "products", "users"]
