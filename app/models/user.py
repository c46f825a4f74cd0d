"""
User account model, including the embedded cart, favorites and notification references
"""

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from app.models.base import CamelModel, DocumentModel


class CartItem(CamelModel):
    product: str
    quantity: int = Field(default=1, ge=1)


class User(DocumentModel):
    """User document as stored in MongoDB"""

    name: str
    email: EmailStr
    password: Optional[str] = None  # bcrypt hash
    is_admin: bool = False

    password_reset_token: Optional[str] = None
    password_reset_expires: Optional[datetime] = None
    email_reset_token: Optional[str] = None
    email_reset_expires: Optional[datetime] = None

    cart: List[CartItem] = Field(default_factory=list)
    favorites: List[str] = Field(default_factory=list)
    notifications: List[str] = Field(default_factory=list)

    def find_cart_item(self, product_id: str) -> Optional[CartItem]:
        for item in self.cart:
            if item.product == product_id:
                return item
        return None

    def add_to_cart(self, product_id: str, quantity: int) -> CartItem:
        """Merge by product id: an existing line gets its quantity increased"""
        item = self.find_cart_item(product_id)
        if item:
            item.quantity += quantity
        else:
            item = CartItem(product=product_id, quantity=quantity)
            self.cart.append(item)
        return item

    def remove_from_cart(self, product_id: str) -> bool:
        item = self.find_cart_item(product_id)
        if item is None:
            return False
        self.cart.remove(item)
        return True
