"""
Database module initialization
"""

from .mongodb import (
    db,
    connect_to_mongo,
    close_mongo_connection,
    create_indexes,
    get_product_collection,
    get_user_collection,
    get_order_collection,
    get_notification_collection,
)

__all__ = [
    "db",
    "connect_to_mongo",
    "close_mongo_connection",
    "create_indexes",
    "get_product_collection",
    "get_user_collection",
    "get_order_collection",
    "get_notification_collection",
]
