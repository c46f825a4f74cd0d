"""
API schemas for Order endpoints
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from app.models.base import CamelModel
from app.models.order import Order, OrderItem, ShippingAddress


class OrderCreate(CamelModel):
    order_items: List[OrderItem] = Field(default_factory=list)
    shipping_address: Optional[ShippingAddress] = None
    payment_method: Optional[str] = None
    items_price: float = Field(0, ge=0)
    tax_price: float = Field(0, ge=0)
    shipping_price: float = Field(0, ge=0)
    total_price: float = Field(0, ge=0)


class OrderUpdate(CamelModel):
    """Partial update; omitted or empty fields keep their value"""
    status: Optional[str] = None
    payment_method: Optional[str] = None


class OrderOwner(CamelModel):
    id: str = Field(..., alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None


class OrderResponse(Order):
    """Order with the owner optionally populated"""
    user: Union[OrderOwner, str]


class StatusBody(CamelModel):
    status: Optional[str] = None


class ShippingDetailsBody(CamelModel):
    shipping_details: Optional[Dict[str, Any]] = None


class PaymentDetailsBody(CamelModel):
    payment_details: Optional[Dict[str, Any]] = None


class TrackingInfoBody(CamelModel):
    tracking_info: Optional[Dict[str, Any]] = None


class OrderConfirmation(CamelModel):
    order_id: str
    total_price: float
    shipping_address: Optional[ShippingAddress] = None
