# =============================================================================
# core/services/order_service.py - Order Business Logic
# =============================================================================
# Creates orders with their items and lists orders with items attached.
# Customers only ever see their own orders; admins see all of them.
# =============================================================================

import logging
from collections import defaultdict
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.order import OrderCreate
from app.exceptions import StoreOperationError

logger = logging.getLogger(__name__)

ORDERS_TABLE = "orders"
ORDER_ITEMS_TABLE = "order_items"


class OrderService:
    """
    Service for order operations.

    The store provides no transaction across the two inserts, so an order
    can exist without items if the second insert fails.
    """

    @staticmethod
    def create_order(user_id: UUID | str, order: OrderCreate) -> dict[str, Any]:
        """
        Create an order and its items for a user.

        Args:
            user_id: The caller placing the order
            order: Validated cart and shipping info

        Returns:
            The created order row with the submitted `items`

        Raises:
            StoreOperationError: If either insert fails
        """
        client = SupabaseClient.get_client()
        shipping = order.shipping

        order_data = {
            "user_id": str(user_id),
            "total": order.total,
            "shipping_name": shipping.name if shipping else None,
            "shipping_email": shipping.email if shipping else None,
            "shipping_address": shipping.address if shipping else None,
        }

        try:
            response = client.table(ORDERS_TABLE).insert(order_data).execute()
        except Exception as e:
            logger.error(f"Failed to create order for user {user_id}: {e}")
            raise StoreOperationError("Error creando orden", str(e))

        if not response.data:
            raise StoreOperationError("Error creando orden", "Insert returned no data")

        created = response.data[0]

        item_rows = [
            {
                "order_id": created["id"],
                "product_id": item.id,
                "name": item.name,
                "price": item.price,
                "quantity": item.qty,
            }
            for item in order.items
        ]

        try:
            client.table(ORDER_ITEMS_TABLE).insert(item_rows).execute()
        except Exception as e:
            logger.error(f"Failed to create items for order {created['id']}: {e}")
            raise StoreOperationError(
                "Orden creada, pero fallo al guardar items",
                str(e),
                code="ORDER_ITEMS_FAILED",
            )

        logger.info(
            f"Created order: {created['id']} for user: {user_id} "
            f"({len(item_rows)} items, total {order.total})"
        )
        return {**created, "items": [item.model_dump() for item in order.items]}

    @staticmethod
    def list_orders(user_id: UUID | str | None = None) -> list[dict[str, Any]]:
        """
        List orders newest first, each with its `items`.

        Args:
            user_id: Restrict to this user's orders; None lists every order

        Raises:
            StoreOperationError: If either query fails
        """
        client = SupabaseClient.get_client()

        try:
            query = (
                client.table(ORDERS_TABLE)
                .select("*")
                .order("created_at", desc=True)
            )
            if user_id is not None:
                query = query.eq("user_id", str(user_id))
            orders = query.execute().data or []
        except Exception as e:
            logger.error(f"Failed to list orders: {e}")
            raise StoreOperationError("Error obteniendo órdenes", str(e))

        if not orders:
            return []

        order_ids = [o["id"] for o in orders]

        try:
            response = (
                client.table(ORDER_ITEMS_TABLE)
                .select("*")
                .in_("order_id", order_ids)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch items for {len(order_ids)} orders: {e}")
            raise StoreOperationError("Error obteniendo items de órdenes", str(e))

        return attach_items(orders, response.data or [])


def attach_items(
    orders: list[dict[str, Any]],
    items: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """
    Group item rows by order_id and attach them to their orders.

    Orders keep their input order; an order with no items gets [].
    """
    items_by_order: dict[Any, list[dict[str, Any]]] = defaultdict(list)
    for item in items:
        items_by_order[item["order_id"]].append(item)

    return [{**o, "items": items_by_order.get(o["id"], [])} for o in orders]
