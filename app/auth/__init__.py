# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer-token authentication against Supabase Auth, with roles read from
# the profiles table.
#
# Usage:
#   from app.auth import get_current_user, require_role, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import check_role, get_current_user, require_role
from app.auth.models import AuthUser, AuthResponse
from app.auth.routing import BearerFirstRoute

__all__ = [
    "BearerFirstRoute",
    "check_role",
    "get_current_user",
    "require_role",
    "AuthUser",
    "AuthResponse",
]
