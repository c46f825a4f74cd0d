"""Fixtures for HTTP-level tests against the FastAPI app"""
import pytest
from unittest.mock import AsyncMock
from bson import ObjectId
from fastapi.testclient import TestClient

from app.core.security import generate_token
from app.dependencies.services import (
    get_notification_repository,
    get_order_repository,
    get_product_repository,
    get_user_repository,
)
from app.repositories import NotificationRepository, OrderRepository, ProductRepository, UserRepository
from main import app


def _repository(spec):
    repo = AsyncMock(spec=spec)
    repo.save.side_effect = lambda model: model

    async def insert(model):
        model.id = str(ObjectId())
        return model

    repo.insert.side_effect = insert
    return repo


@pytest.fixture
def user_repo():
    repo = _repository(UserRepository)
    repo.get_by_id.return_value = None
    repo.find_by_ids.return_value = {}
    return repo


@pytest.fixture
def product_repo():
    return _repository(ProductRepository)


@pytest.fixture
def order_repo():
    return _repository(OrderRepository)


@pytest.fixture
def notification_repo():
    return _repository(NotificationRepository)


@pytest.fixture
def client(user_repo, product_repo, order_repo, notification_repo):
    """Test client with every repository replaced by a mock; the lifespan (MongoDB) is not run"""
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_product_repository] = lambda: product_repo
    app.dependency_overrides[get_order_repository] = lambda: order_repo
    app.dependency_overrides[get_notification_repository] = lambda: notification_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(user_repo):
    """Bearer headers for a user the mocked repository will resolve"""
    def _headers(user):
        user_repo.get_by_id.side_effect = lambda user_id: user if user_id == user.id else None
        return {"Authorization": f"Bearer {generate_token(user.id)}"}
    return _headers
