# =============================================================================
# core/models/profile.py - Profile (Access-Control Record) Schemas
# =============================================================================
# A profile row in the `profiles` table is the durable source of a user's
# role. It is keyed by the Supabase Auth user id.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """
    Roles a caller can hold.

    Roles are flat: ADMIN does not imply CUSTOMER.
    """
    CUSTOMER = "customer"
    ADMIN = "admin"


class ProfileResponse(BaseModel):
    """
    Profile returned to clients after login / registration.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "email": "player@lvlup.com",
            "role": "customer",
            "name": "Player One"
        }
    """
    id: str = Field(..., description="Supabase Auth user id")
    email: str | None = Field(default=None, description="Account email")
    role: Role = Field(..., description="Role used for authorization")
    name: str | None = Field(default=None, description="Display name")
