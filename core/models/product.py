# =============================================================================
# core/models/product.py - Product Schemas
# =============================================================================
# Request bodies for the product catalog. Rows returned by the store are
# passed through as-is.
# =============================================================================

from pydantic import BaseModel, Field, field_validator


class ProductCreate(BaseModel):
    """
    Body for POST /products.

    Example:
        {
            "name": "Control inalámbrico",
            "description": "Control para consola",
            "price": 59990,
            "stock": 10,
            "image_url": "https://cdn.lvlup.com/control.png"
        }
    """
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    description: str | None = None
    stock: int | None = Field(default=None, ge=0)
    image_url: str | None = None


class ProductUpdate(BaseModel):
    """
    Body for PUT /products/{id}.

    Only fields present in the request are written.
    """
    name: str | None = Field(default=None, min_length=1, max_length=255)
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    stock: int | None = Field(default=None, ge=0)
    image_url: str | None = None

    @field_validator("name", "price")
    @classmethod
    def not_null(cls, value):
        """name and price may be omitted, but never cleared."""
        if value is None:
            raise ValueError("no puede ser null")
        return value

    def changes(self) -> dict:
        """Fields explicitly set by the client."""
        return self.model_dump(exclude_unset=True)
