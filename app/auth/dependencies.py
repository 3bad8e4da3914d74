# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication and authorization.
#
# get_current_user resolves the caller in two sequential remote calls:
#   1. Supabase Auth validates the bearer token (auth.get_user)
#   2. The caller's role is read from their row in the profiles table
#
# require_role builds a dependency that gates a route to one or more roles.
#
# Usage:
#   from app.auth import get_current_user, require_role, AuthUser
#
#   @router.post("/products")
#   async def create(user: AuthUser = Depends(require_role(Role.ADMIN))):
#       ...
# =============================================================================

import logging
from typing import Iterable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.auth.models import AuthUser
from app.exceptions import (
    InsufficientRoleError,
    InvalidCredentialError,
    MissingCredentialError,
    NotAuthenticatedError,
    ProfileLookupError,
    ProfileNotFoundError,
)
from core.models.profile import Role
from core.services.auth_service import AuthService
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. Returns None instead of raising so that a
# missing or malformed header produces our own error body.
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Resolve the caller from the `Authorization: Bearer <token>` header.

    This dependency:
    1. Rejects requests without a usable bearer token (no remote call made)
    2. Asks Supabase Auth to validate the token
    3. Loads the caller's profile and takes the role from it

    Returns:
        AuthUser: The caller's id, email and stored role

    Raises:
        MissingCredentialError: 401 if the header is missing or malformed
        InvalidCredentialError: 401 if Supabase rejects the token
        ProfileNotFoundError: 403 if the token is valid but has no profile
        InvalidProfileError: 403 if the profile holds an unknown role
        ProfileLookupError: 500 if the profile query fails
    """
    if credentials is None or not credentials.credentials.strip():
        logger.warning("Rejected request without bearer token")
        raise MissingCredentialError()

    token = credentials.credentials.strip()

    try:
        subject = SupabaseClient.get_user_from_token(token)
    except SupabaseClientError as e:
        logger.warning(f"Token rejected by Supabase Auth: {e.code}")
        logger.debug(f"Token rejection detail: {e.message}")
        raise InvalidCredentialError()

    if subject is None:
        logger.warning("Supabase Auth returned no user for token")
        raise InvalidCredentialError()

    user_id = subject["id"]

    try:
        profile = SupabaseClient.fetch_profile(user_id)
    except SupabaseClientError as e:
        logger.error(f"Profile lookup failed for user {user_id}: {e}")
        raise ProfileLookupError(user_id, str(e))

    if profile is None:
        logger.warning(f"Valid token for user {user_id} but no profile found")
        raise ProfileNotFoundError(user_id)

    role = AuthService.role_of(profile)

    logger.debug(f"Authenticated user: {user_id} ({role.value})")
    return AuthUser(
        id=user_id,
        email=profile.get("email") or subject.get("email"),
        role=role,
    )


def check_role(user: Optional[AuthUser], required: Iterable[Role | str]) -> AuthUser:
    """
    Allow the caller iff their role is in the required set.

    Exact match only; no role implies another.

    Raises:
        NotAuthenticatedError: 401 if no caller was resolved
        InsufficientRoleError: 403 if the caller's role is not allowed
    """
    allowed = {Role(r).value for r in required}

    if user is None:
        logger.error("Role check ran without a resolved user")
        raise NotAuthenticatedError()

    if user.role.value not in allowed:
        logger.warning(
            f"User {user.id} with role {user.role.value} denied; requires {sorted(allowed)}"
        )
        raise InsufficientRoleError(user.role.value, sorted(allowed))

    return user


def require_role(*roles: Role | str):
    """
    Build a dependency that only lets callers with one of `roles` through.

    Usage:
        @router.delete("/{product_id}")
        async def delete(user: AuthUser = Depends(require_role(Role.ADMIN))):
            ...
    """
    if not roles:
        raise ValueError("require_role needs at least one role")

    required = tuple(Role(r) for r in roles)

    async def role_gate(
        user: Optional[AuthUser] = Depends(get_current_user)
    ) -> AuthUser:
        return check_role(user, required)

    return role_gate
