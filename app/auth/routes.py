# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for login, registration and the current user.
#
# The storefront talks only to this API; it never calls Supabase directly.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_user
from app.auth.models import AuthResponse, AuthUser, LoginRequest, RegisterRequest
from app.auth.routing import BearerFirstRoute
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(route_class=BearerFirstRoute)


@router.post("/auth/login", response_model=AuthResponse)
async def login(request: LoginRequest) -> AuthResponse:
    """
    Sign in with email and password.

    Returns:
        AuthResponse: Access token and the user's profile

    Raises:
        401: If the credentials are invalid
        403: If the user has no profile
    """
    result = AuthService.login(request.email, request.password)
    return AuthResponse(**result)


@router.post(
    "/auth/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(request: RegisterRequest) -> AuthResponse:
    """
    Create an account with the customer role and sign it in.

    Raises:
        400: If Supabase refuses to create the user
        500: If the profile or the session could not be created
    """
    result = AuthService.register(request.name, request.email, request.password)
    return AuthResponse(**result)


@router.get("/me", response_model=AuthUser)
async def get_me(user: AuthUser = Depends(get_current_user)) -> AuthUser:
    """
    Get the current caller as resolved from their token and profile.

    Raises:
        401: If not authenticated
        403: If the user has no profile
    """
    return user
