# =============================================================================
# app/routers/orders.py - Order Endpoints
# =============================================================================
# Any authenticated caller can place orders. Listing returns the caller's
# own orders, or every order for admins.
# =============================================================================

from typing import Any

from fastapi import APIRouter, Depends, status

from app.auth import AuthUser, BearerFirstRoute, get_current_user
from core.models.order import OrderCreate
from core.models.profile import Role
from core.services.order_service import OrderService

router = APIRouter(route_class=BearerFirstRoute)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(
    order: OrderCreate,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, Any]:
    """
    Place an order for the current user.

    The total is computed server-side from the items' price and qty.
    """
    return OrderService.create_order(user.id, order)


@router.get("")
async def list_orders(
    user: AuthUser = Depends(get_current_user),
) -> list[dict[str, Any]]:
    """
    List orders, newest first, each with its items.

    Customers see only their own orders; admins see all.
    """
    owner = None if user.role == Role.ADMIN else user.id
    return OrderService.list_orders(user_id=owner)
