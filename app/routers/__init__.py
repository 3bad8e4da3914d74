# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - products.py: Product catalog (public list, admin writes)
# - orders.py: Order placement and listing
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import products
from . import orders

__all__ = [
    "health",
    "products",
    "orders",
]
