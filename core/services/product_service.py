# =============================================================================
# core/services/product_service.py - Product Catalog Logic
# =============================================================================
# Handles product CRUD against the `products` table.
# Separates HTTP concerns from database logic.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient
from core.models.product import ProductCreate, ProductUpdate
from app.exceptions import BadRequestError, ProductNotFoundError, StoreOperationError

logger = logging.getLogger(__name__)

PRODUCTS_TABLE = "products"


class ProductService:
    """
    Service for product catalog operations.

    Access control is enforced by the routes; this layer trusts its caller.
    """

    @staticmethod
    def list_products() -> list[dict[str, Any]]:
        """
        List every product, ordered by id ascending.

        Raises:
            StoreOperationError: If the query fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(PRODUCTS_TABLE)
                .select("*")
                .order("id", desc=False)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list products: {e}")
            raise StoreOperationError("Error obteniendo productos", str(e))

        return response.data or []

    @staticmethod
    def create_product(product: ProductCreate) -> dict[str, Any]:
        """
        Insert a new product.

        Returns:
            The created product row

        Raises:
            StoreOperationError: If the insert fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(PRODUCTS_TABLE)
                .insert(product.model_dump())
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to create product: {e}")
            raise StoreOperationError("Error creando producto", str(e))

        if not response.data:
            raise StoreOperationError("Error creando producto", "Insert returned no data")

        created = response.data[0]
        logger.info(f"Created product: {created.get('id')}")
        return created

    @staticmethod
    def update_product(product_id: int, update: ProductUpdate) -> dict[str, Any]:
        """
        Update the fields the client sent for a product.

        Raises:
            BadRequestError: If no fields were sent
            ProductNotFoundError: If no product has this id
            StoreOperationError: If the update fails
        """
        changes = update.changes()
        if not changes:
            raise BadRequestError("No hay campos para actualizar", code="EMPTY_UPDATE")

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(PRODUCTS_TABLE)
                .update(changes)
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update product {product_id}: {e}")
            raise StoreOperationError("Error actualizando producto", str(e))

        if not response.data:
            raise ProductNotFoundError(product_id)

        logger.info(f"Updated product: {product_id} ({', '.join(changes)})")
        return response.data[0]

    @staticmethod
    def delete_product(product_id: int) -> None:
        """
        Delete a product. Deleting a missing id is not an error.

        Raises:
            StoreOperationError: If the delete fails
        """
        client = SupabaseClient.get_client()

        try:
            client.table(PRODUCTS_TABLE).delete().eq("id", product_id).execute()
        except Exception as e:
            logger.error(f"Failed to delete product {product_id}: {e}")
            raise StoreOperationError("Error eliminando producto", str(e))

        logger.info(f"Deleted product: {product_id}")
