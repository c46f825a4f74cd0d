"""
Order API endpoints: placement, lookups and lifecycle transitions
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from app.core.errors import ErrorResponseModel
from app.dependencies.auth import get_current_user, require_admin
from app.dependencies.services import get_order_service
from app.models.order import Order, OrderItem, PaymentResult
from app.models.user import User
from app.schemas.order import (
    OrderConfirmation,
    OrderCreate,
    OrderResponse,
    OrderUpdate,
    PaymentDetailsBody,
    ShippingDetailsBody,
    StatusBody,
    TrackingInfoBody,
)
from app.schemas.user import MessageResponse
from app.services.order import OrderService

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponseModel}}
FORBIDDEN_OR_NOT_FOUND = {403: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}}


@router.post(
    "",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}, 401: {"model": ErrorResponseModel}},
)
async def create_order(
    data: OrderCreate,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    """Place an order owned by the caller; an empty item list is rejected"""
    return await service.create_order(data, user)


@router.get("", response_model=List[Order])
async def list_my_orders(
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return await service.list_my_orders(user)


@router.get("/all", response_model=List[OrderResponse])
async def list_all_orders(
    service: OrderService = Depends(get_order_service),
    _: User = Depends(require_admin),
):
    """Every order, newest first, with the owner's name and e-mail"""
    return await service.list_all_orders()


@router.get("/{order_id}", response_model=OrderResponse, responses=FORBIDDEN_OR_NOT_FOUND)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return await service.get_order(order_id, user)


@router.put("/{order_id}", response_model=Order, responses=NOT_FOUND)
async def update_order(
    order_id: str,
    data: OrderUpdate,
    service: OrderService = Depends(get_order_service),
    _: User = Depends(require_admin),
):
    return await service.update_order(order_id, data)


@router.delete("/{order_id}", response_model=MessageResponse, responses=NOT_FOUND)
async def delete_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    _: User = Depends(require_admin),
):
    await service.delete_order(order_id)
    return {"message": "Order deleted successfully"}


# Lifecycle transitions
@router.put("/{order_id}/pay", response_model=Order, responses=FORBIDDEN_OR_NOT_FOUND)
async def pay_order(
    order_id: str,
    result: PaymentResult,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    """Record the payment provider's result as sent by the client"""
    return await service.mark_paid(order_id, result, user)


@router.put("/{order_id}/delivered", response_model=Order, responses=NOT_FOUND)
async def deliver_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    _: User = Depends(require_admin),
):
    return await service.mark_delivered(order_id)


@router.put("/{order_id}/unpaid", response_model=Order, responses=FORBIDDEN_OR_NOT_FOUND)
async def unpay_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return await service.mark_unpaid(order_id, user)


@router.put(
    "/{order_id}/cancel",
    response_model=Order,
    responses={400: {"model": ErrorResponseModel}, **FORBIDDEN_OR_NOT_FOUND},
)
async def cancel_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    """Paid orders cannot be cancelled"""
    return await service.cancel_order(order_id, user)


# Sub-resources
@router.get("/{order_id}/status", response_model=StatusBody, responses=FORBIDDEN_OR_NOT_FOUND)
async def get_order_status(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    order = await service.get_accessible(order_id, user)
    return {"status": order.status}


@router.put("/{order_id}/status", response_model=Order, responses=NOT_FOUND)
async def set_order_status(
    order_id: str,
    data: StatusBody,
    service: OrderService = Depends(get_order_service),
    _: User = Depends(require_admin),
):
    return await service.set_status(order_id, data.status)


@router.get("/{order_id}/shipping", responses=FORBIDDEN_OR_NOT_FOUND)
async def get_shipping_details(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    order = await service.get_accessible(order_id, user)
    return order.shipping_details


@router.put("/{order_id}/shipping", response_model=Order, responses=FORBIDDEN_OR_NOT_FOUND)
async def set_shipping_details(
    order_id: str,
    data: ShippingDetailsBody,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return await service.set_shipping_details(order_id, data.shipping_details, user)


@router.get("/{order_id}/payment", responses=FORBIDDEN_OR_NOT_FOUND)
async def get_payment_details(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    order = await service.get_accessible(order_id, user)
    return order.payment_details


@router.put("/{order_id}/payment", response_model=Order, responses=FORBIDDEN_OR_NOT_FOUND)
async def set_payment_details(
    order_id: str,
    data: PaymentDetailsBody,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return await service.set_payment_details(order_id, data.payment_details, user)


@router.get("/{order_id}/tracking", response_model=Dict[str, Any], responses=FORBIDDEN_OR_NOT_FOUND)
async def get_tracking_info(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return await service.get_tracking_info(order_id, user)


@router.put("/{order_id}/tracking", response_model=Order, responses=NOT_FOUND)
async def set_tracking_info(
    order_id: str,
    data: TrackingInfoBody,
    service: OrderService = Depends(get_order_service),
    _: User = Depends(require_admin),
):
    return await service.set_tracking_info(order_id, data.tracking_info)


@router.get("/{order_id}/items", response_model=List[OrderItem], responses=FORBIDDEN_OR_NOT_FOUND)
async def get_order_items(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    order = await service.get_accessible(order_id, user)
    return order.order_items


@router.get(
    "/{order_id}/confirmation",
    response_model=OrderConfirmation,
    responses=FORBIDDEN_OR_NOT_FOUND,
)
async def get_order_confirmation(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return await service.get_confirmation(order_id, user)
