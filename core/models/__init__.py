# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - profile.py: Roles and profile (access-control record) schemas
# - product.py: Product create/update bodies
# - order.py: Order create body, cart items and shipping info
#
# These models define the "contract" between API and clients.
# =============================================================================

from .profile import Role, ProfileResponse
from .product import ProductCreate, ProductUpdate
from .order import OrderCreate, OrderItemIn, ShippingInfo

__all__ = [
    "Role",
    "ProfileResponse",
    "ProductCreate",
    "ProductUpdate",
    "OrderCreate",
    "OrderItemIn",
    "ShippingInfo",
]
