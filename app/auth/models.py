# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field

from core.models.profile import Role, ProfileResponse


class AuthUser(BaseModel):
    """
    The resolved caller for one request.

    `role` always comes from the caller's profile row, never from the
    token or the request body. Built fresh per request and immutable.
    """
    id: str
    email: str | None = None
    role: Role

    model_config = ConfigDict(frozen=True)


class LoginRequest(BaseModel):
    """Body for POST /auth/login."""
    email: str = Field(..., min_length=3, examples=["player@lvlup.com"])
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Body for POST /auth/register."""
    name: str = Field(..., min_length=1, examples=["Player One"])
    email: str = Field(..., min_length=3, examples=["player@lvlup.com"])
    password: str = Field(..., min_length=6)


class AuthResponse(BaseModel):
    """
    Token plus profile, returned by login and register.

    Example:
        {
            "token": "eyJhbGciOi...",
            "user": {"id": "550e8400-...", "email": "player@lvlup.com", "role": "customer"}
        }
    """
    token: str
    user: ProfileResponse
