# =============================================================================
# app/routers/products.py - Product Catalog Endpoints
# =============================================================================
# Listing is public. Creating, updating and deleting products is
# restricted to admins.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Response, status

from app.auth import AuthUser, BearerFirstRoute, require_role
from core.models.product import ProductCreate, ProductUpdate
from core.models.profile import Role
from core.services.product_service import ProductService

router = APIRouter(route_class=BearerFirstRoute)

require_admin = require_role(Role.ADMIN)


@router.get("")
async def list_products() -> list[dict[str, Any]]:
    """
    List all products, ordered by id.

    No authentication required.
    """
    return ProductService.list_products()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    user: AuthUser = Depends(require_admin),
) -> dict[str, Any]:
    """
    Create a product. Admin only.

    Returns the created row.
    """
    return ProductService.create_product(product)


@router.put("/{product_id}")
async def update_product(
    product_id: Annotated[int, Path(description="Product id")],
    update: ProductUpdate,
    user: AuthUser = Depends(require_admin),
) -> dict[str, Any]:
    """
    Update a product. Admin only.

    Only the fields present in the body are changed.
    """
    return ProductService.update_product(product_id, update)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: Annotated[int, Path(description="Product id")],
    user: AuthUser = Depends(require_admin),
) -> Response:
    """Delete a product. Admin only."""
    ProductService.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
