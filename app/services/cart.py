"""
Cart and favorites service, operating on the lists embedded in the user document
"""

from typing import List

from app.core.errors import ErrorResponse
from app.core.logger import logger
from app.models.user import CartItem, User
from app.repositories.user import UserRepository


class CartService:
    """Cart (merge-by-product) and favorites operations"""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def _get_user(self, user_id: str) -> User:
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise ErrorResponse("User not found", status_code=404)
        return user

    async def get_cart(self, user_id: str) -> List[CartItem]:
        user = await self._get_user(user_id)
        return user.cart

    async def add_to_cart(self, user_id: str, product_id: str, quantity: int) -> List[CartItem]:
        """Adding a product already in the cart increases its quantity"""
        user = await self._get_user(user_id)
        item = user.add_to_cart(product_id, quantity)
        await self.repository.save(user)

        logger.info(
            "Product added to cart",
            user_id=user_id,
            metadata={"event": "cart_add", "product_id": product_id, "quantity": item.quantity}
        )
        return user.cart

    async def update_cart_item(self, user_id: str, product_id: str, quantity: int) -> List[CartItem]:
        user = await self._get_user(user_id)
        item = user.find_cart_item(product_id)
        if item is None:
            raise ErrorResponse("Product not found in cart", status_code=404)

        item.quantity = quantity
        await self.repository.save(user)
        return user.cart

    async def remove_from_cart(self, user_id: str, product_id: str) -> List[CartItem]:
        user = await self._get_user(user_id)
        if not user.remove_from_cart(product_id):
            raise ErrorResponse("Product not found in cart", status_code=404)

        await self.repository.save(user)
        return user.cart

    async def get_favorites(self, user_id: str) -> List[str]:
        user = await self._get_user(user_id)
        return user.favorites

    async def add_favorite(self, user_id: str, product_id: str) -> List[str]:
        user = await self._get_user(user_id)
        if product_id not in user.favorites:
            user.favorites.append(product_id)
            await self.repository.save(user)
        return user.favorites

    async def remove_favorite(self, user_id: str, product_id: str) -> List[str]:
        """Removing a product that is not a favorite is a no-op"""
        user = await self._get_user(user_id)
        if product_id in user.favorites:
            user.favorites.remove(product_id)
            await self.repository.save(user)
        return user.favorites
