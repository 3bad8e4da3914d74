# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .product_service import ProductService
from .order_service import OrderService

__all__ = [
    "AuthService",
    "ProductService",
    "OrderService",
]
