"""
Order service: creation, lookups and lifecycle transitions
"""

from typing import Any, Dict, List, Optional

from app.core.errors import ErrorResponse
from app.core.logger import logger
from app.models.order import Order, PaymentResult
from app.models.user import User
from app.repositories.order import OrderRepository
from app.repositories.user import UserRepository
from app.schemas.order import OrderConfirmation, OrderCreate, OrderOwner, OrderResponse, OrderUpdate


class OrderService:
    """Service layer for orders"""

    def __init__(self, repository: OrderRepository, user_repository: UserRepository):
        self.repository = repository
        self.user_repository = user_repository

    async def _get(self, order_id: str) -> Order:
        order = await self.repository.get_by_id(order_id)
        if not order:
            raise ErrorResponse("Order not found", status_code=404)
        return order

    async def get_accessible(self, order_id: str, user: User) -> Order:
        """Order lookup restricted to its owner and admins"""
        order = await self._get(order_id)
        if order.user != user.id and not user.is_admin:
            logger.warning(
                f"User {user.id} denied access to order {order_id}",
                metadata={"event": "order_access_denied", "order_id": order_id}
            )
            raise ErrorResponse("Not authorized to access this order", status_code=403)
        return order

    async def _populate(self, orders: List[Order]) -> List[OrderResponse]:
        """Replace owner ids with {_id, name, email} where the owner still exists"""
        owners = await self.user_repository.find_by_ids(order.user for order in orders)
        populated = []
        for order in orders:
            owner = owners.get(order.user)
            populated.append(
                OrderResponse(
                    **order.model_dump(exclude={"user"}),
                    user=OrderOwner(id=owner.id, name=owner.name, email=owner.email) if owner else order.user,
                )
            )
        return populated

    async def _update(self, order: Order, event: str, **changes: Any) -> Order:
        for field, value in changes.items():
            setattr(order, field, value)
        order = await self.repository.save(order)
        logger.info(
            f"Order {order.id} updated",
            metadata={"event": event, "order_id": order.id, "fields": list(changes)}
        )
        return order

    async def create_order(self, data: OrderCreate, user: User) -> Order:
        if not data.order_items:
            raise ErrorResponse("No order items", status_code=400)

        order = Order(user=user.id, **data.model_dump())
        return await self.repository.insert(order)

    async def list_my_orders(self, user: User) -> List[Order]:
        return await self.repository.list_by_user(user.id)

    async def list_all_orders(self) -> List[OrderResponse]:
        return await self._populate(await self.repository.list_all())

    async def get_order(self, order_id: str, user: User) -> OrderResponse:
        order = await self.get_accessible(order_id, user)
        return (await self._populate([order]))[0]

    async def mark_paid(self, order_id: str, result: PaymentResult, user: User) -> Order:
        """The payment snapshot is trusted as sent; it is not re-verified with the provider"""
        order = await self.get_accessible(order_id, user)
        order.mark_paid(result)
        order = await self.repository.save(order)
        logger.info(
            f"Order {order_id} paid",
            metadata={"event": "order_paid", "order_id": order_id, "payment_id": result.id}
        )
        return order

    async def mark_delivered(self, order_id: str) -> Order:
        order = await self._get(order_id)
        order.mark_delivered()
        order = await self.repository.save(order)
        logger.info(f"Order {order_id} delivered", metadata={"event": "order_delivered", "order_id": order_id})
        return order

    async def mark_unpaid(self, order_id: str, user: User) -> Order:
        order = await self.get_accessible(order_id, user)
        order.mark_unpaid()
        order = await self.repository.save(order)
        logger.info(f"Order {order_id} marked unpaid", metadata={"event": "order_unpaid", "order_id": order_id})
        return order

    async def cancel_order(self, order_id: str, user: User) -> Order:
        order = await self.get_accessible(order_id, user)
        if order.is_paid:
            raise ErrorResponse("Cannot cancel a paid order", status_code=400)

        order.cancel()
        order = await self.repository.save(order)
        logger.info(f"Order {order_id} cancelled", metadata={"event": "order_cancelled", "order_id": order_id})
        return order

    async def set_status(self, order_id: str, status: Optional[str]) -> Order:
        return await self._update(await self._get(order_id), "order_status_set", status=status)

    async def set_shipping_details(self, order_id: str, details: Optional[Dict[str, Any]], user: User) -> Order:
        order = await self.get_accessible(order_id, user)
        return await self._update(order, "order_shipping_set", shipping_details=details)

    async def set_payment_details(self, order_id: str, details: Optional[Dict[str, Any]], user: User) -> Order:
        order = await self.get_accessible(order_id, user)
        return await self._update(order, "order_payment_details_set", payment_details=details)

    async def set_tracking_info(self, order_id: str, tracking: Optional[Dict[str, Any]]) -> Order:
        return await self._update(await self._get(order_id), "order_tracking_set", tracking_info=tracking)

    async def get_tracking_info(self, order_id: str, user: User) -> Dict[str, Any]:
        order = await self.get_accessible(order_id, user)
        if not order.tracking_info:
            raise ErrorResponse("Tracking information not available for this order", status_code=404)
        return order.tracking_info

    async def get_confirmation(self, order_id: str, user: User) -> OrderConfirmation:
        order = await self.get_accessible(order_id, user)
        return OrderConfirmation(
            order_id=order.id,
            total_price=order.total_price,
            shipping_address=order.shipping_address,
        )

    async def update_order(self, order_id: str, data: OrderUpdate) -> Order:
        """Partial update: omitted or empty fields retain their prior value"""
        order = await self._get(order_id)
        changes = {field: value for field, value in data.model_dump().items() if value}
        return await self._update(order, "order_updated", **changes)

    async def delete_order(self, order_id: str) -> None:
        await self._get(order_id)
        await self.repository.delete(order_id)
        logger.info(f"Order {order_id} deleted", metadata={"event": "order_deleted", "order_id": order_id})

    async def list_for_user(self, user_id: str) -> List[Order]:
        if not await self.user_repository.get_by_id(user_id):
            raise ErrorResponse("User not found", status_code=404)
        return await self.repository.list_by_user(user_id)

    async def delete_for_user(self, user_id: str, order_id: str) -> None:
        """Delete an order through its owner's path; the path user must own it"""
        if not await self.user_repository.get_by_id(user_id):
            raise ErrorResponse("User not found", status_code=404)

        order = await self._get(order_id)
        if order.user != user_id:
            raise ErrorResponse("Unauthorized access to order", status_code=403)

        await self.repository.delete(order_id)
        logger.info(
            f"Order {order_id} deleted by owner path",
            metadata={"event": "user_order_deleted", "order_id": order_id, "user_id": user_id}
        )
