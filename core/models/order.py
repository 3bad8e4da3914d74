# =============================================================================
# core/models/order.py - Order Schemas
# =============================================================================
# These models define the API contract for order operations:
# - OrderItemIn: One cart line sent by the client
# - ShippingInfo: Optional shipping details
# - OrderCreate: Body for POST /orders
#
# Orders and order_items rows themselves are passed through from the store.
# =============================================================================

from pydantic import BaseModel, Field


class OrderItemIn(BaseModel):
    """
    A cart line as sent by the storefront.

    `id` is the product id; `qty` the quantity.
    """
    id: int | str = Field(..., description="Product id")
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    qty: int = Field(..., ge=1)

    @property
    def subtotal(self) -> float:
        return self.price * self.qty


class ShippingInfo(BaseModel):
    """Shipping details attached to an order."""
    name: str | None = None
    email: str | None = None
    address: str | None = None


class OrderCreate(BaseModel):
    """
    Body for POST /orders.

    Example:
        {
            "items": [{"id": 1, "name": "Control", "price": 59990, "qty": 2}],
            "shipping": {"name": "Ana", "email": "ana@mail.com", "address": "Calle 1"}
        }
    """
    items: list[OrderItemIn] = Field(..., min_length=1)
    shipping: ShippingInfo | None = None

    @property
    def total(self) -> float:
        """Sum of price * qty over all items."""
        return sum(item.subtotal for item in self.items)
