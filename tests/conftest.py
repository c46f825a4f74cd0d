"""Shared test fixtures"""
import os

# Settings are read once at import time
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENABLE_TELEMETRY", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from app.models.order import Order, OrderItem, ShippingAddress
from app.models.product import Product
from app.models.user import User

USER_ID = "507f1f77bcf86cd799439011"
ADMIN_ID = "507f1f77bcf86cd799439012"
PRODUCT_ID = "507f1f77bcf86cd799439021"
ORDER_ID = "507f1f77bcf86cd799439031"


@pytest.fixture
def mock_collection():
    """Mock Motor collection for testing"""
    collection = AsyncMock()
    # find() is synchronous on Motor and returns a cursor
    collection.find = MagicMock()
    return collection


@pytest.fixture
def make_cursor():
    """Factory for cursor mocks supporting sort/skip/limit chaining"""
    def _make(docs):
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.skip.return_value = cursor
        cursor.limit.return_value = cursor
        cursor.to_list = AsyncMock(return_value=docs)
        return cursor
    return _make


@pytest.fixture
def regular_user():
    return User(id=USER_ID, name="Alice", email="alice@mail.com", password="hash", version=1)


@pytest.fixture
def admin_user():
    return User(id=ADMIN_ID, name="Admin", email="admin@mail.com", password="hash", is_admin=True)


@pytest.fixture
def sample_product():
    return Product(
        id=PRODUCT_ID,
        user=ADMIN_ID,
        name="Velvet Chair",
        description="Soft and sturdy",
        image="/images/chair.png",
        price=89.99,
        count_in_stock=3,
    )


@pytest.fixture
def mock_product_doc():
    """Product document as stored in MongoDB"""
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(PRODUCT_ID),
        "user": ADMIN_ID,
        "name": "Velvet Chair",
        "description": "Soft and sturdy",
        "image": "/images/chair.png",
        "price": 89.99,
        "countInStock": 3,
        "rating": 4.5,
        "numReviews": 2,
        "reviews": [
            {"name": "Bob", "rating": 5, "comment": "Great!", "user": "u1", "createdAt": now},
            {"name": "Eve", "rating": 4, "comment": "Good", "user": "u2", "createdAt": now},
        ],
        "createdAt": now,
        "updatedAt": now,
        "version": 2,
    }


@pytest.fixture
def sample_order():
    return Order(
        id=ORDER_ID,
        user=USER_ID,
        order_items=[OrderItem(name="Velvet Chair", qty=2, price=89.99, product=PRODUCT_ID)],
        shipping_address=ShippingAddress(address="1 Main St", city="Oslo", postal_code="0150", country="NO"),
        payment_method="PayPal",
        items_price=179.98,
        tax_price=18.0,
        shipping_price=0,
        total_price=197.98,
    )
