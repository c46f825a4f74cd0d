"""
Order model and its lifecycle transitions
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.models.base import CamelModel, DocumentModel, utc_now


class OrderItem(CamelModel):
    name: str
    qty: int = Field(..., ge=1)
    image: Optional[str] = None
    price: float = Field(..., ge=0)
    product: str


class ShippingAddress(CamelModel):
    address: str
    city: str
    postal_code: str
    country: str


class PaymentResult(BaseModel):
    """Payment provider snapshot, keys kept as the provider sends them"""
    id: Optional[str] = None
    status: Optional[str] = None
    update_time: Optional[str] = None
    email_address: Optional[str] = None


class Order(DocumentModel):
    """
    Customer order.

    Lifecycle: created -> paid -> delivered, with paid -> unpaid and
    unpaid -> cancelled as the only side transitions. Re-applying a
    transition is a no-op success apart from refreshed timestamps.
    """

    user: str  # owner id
    order_items: List[OrderItem] = Field(default_factory=list)
    shipping_address: Optional[ShippingAddress] = None
    payment_method: Optional[str] = None
    payment_result: Optional[PaymentResult] = None

    items_price: float = 0
    tax_price: float = 0
    shipping_price: float = 0
    total_price: float = 0

    is_paid: bool = False
    paid_at: Optional[datetime] = None
    is_delivered: bool = False
    delivered_at: Optional[datetime] = None
    is_cancelled: bool = False
    cancelled_at: Optional[datetime] = None
    status: Optional[str] = None

    shipping_details: Optional[Dict[str, Any]] = None
    payment_details: Optional[Dict[str, Any]] = None
    tracking_info: Optional[Dict[str, Any]] = None

    def mark_paid(self, result: PaymentResult) -> None:
        self.is_paid = True
        self.paid_at = utc_now()
        self.payment_result = result

    def mark_unpaid(self) -> None:
        self.is_paid = False
        self.paid_at = None
        self.payment_result = None
        self.status = "Unpaid"

    def mark_delivered(self) -> None:
        self.is_delivered = True
        self.delivered_at = utc_now()

    def cancel(self) -> None:
        """Callers must reject paid orders before cancelling"""
        self.is_cancelled = True
        self.cancelled_at = utc_now()
