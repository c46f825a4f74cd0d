"""
Dependency injection for repositories and services
"""

from fastapi import Depends

from app.db.mongodb import (
    get_notification_collection,
    get_order_collection,
    get_product_collection,
    get_user_collection,
)
from app.repositories import (
    NotificationRepository,
    OrderRepository,
    ProductRepository,
    UserRepository,
)
from app.services import (
    CartService,
    NotificationService,
    OrderService,
    ProductService,
    UserService,
)


async def get_product_repository() -> ProductRepository:
    """Get product repository instance"""
    collection = await get_product_collection()
    return ProductRepository(collection)


async def get_user_repository() -> UserRepository:
    collection = await get_user_collection()
    return UserRepository(collection)


async def get_order_repository() -> OrderRepository:
    collection = await get_order_collection()
    return OrderRepository(collection)


async def get_notification_repository() -> NotificationRepository:
    collection = await get_notification_collection()
    return NotificationRepository(collection)


async def get_product_service(
    repository: ProductRepository = Depends(get_product_repository)
) -> ProductService:
    """Get product service instance"""
    return ProductService(repository)


async def get_user_service(
    repository: UserRepository = Depends(get_user_repository)
) -> UserService:
    return UserService(repository)


async def get_cart_service(
    repository: UserRepository = Depends(get_user_repository)
) -> CartService:
    return CartService(repository)


async def get_notification_service(
    repository: NotificationRepository = Depends(get_notification_repository),
    user_repository: UserRepository = Depends(get_user_repository),
) -> NotificationService:
    return NotificationService(repository, user_repository)


async def get_order_service(
    repository: OrderRepository = Depends(get_order_repository),
    user_repository: UserRepository = Depends(get_user_repository),
) -> OrderService:
    return OrderService(repository, user_repository)
