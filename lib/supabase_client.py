# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for:
# - Verifying bearer tokens against Supabase Auth
# - Password sign-in and sign-up
# - Reading and creating access-control records (profiles table)
#
# Table CRUD for products and orders lives in core/services.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   subject = SupabaseClient.get_user_from_token(token)
#   profile = SupabaseClient.fetch_profile(subject["id"])
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client, ClientOptions

from app.config import settings

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"
PROFILE_COLUMNS = "id, email, role"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a machine-readable code so callers can map it to an API error.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class SupabaseClient:
    """
    Typed wrapper for Supabase auth and profile operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        subject = SupabaseClient.get_user_from_token("eyJhbGciOi...")
        if subject:
            profile = SupabaseClient.fetch_profile(subject["id"])
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses the service_role key, which bypasses Row Level Security.
        Sessions are never persisted or refreshed: every request carries
        its own bearer token.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY,
                    options=ClientOptions(
                        auto_refresh_token=False,
                        persist_session=False,
                    ),
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # Auth Operations
    # -------------------------------------------------------------------------

    @classmethod
    def get_user_from_token(cls, token: str) -> dict[str, Any] | None:
        """
        Ask Supabase Auth who a bearer token belongs to.

        Args:
            token: The raw access token (without the "Bearer " prefix)

        Returns:
            Subject dict {"id", "email"}, or None if the provider answered
            without a user

        Raises:
            SupabaseClientError: If the provider rejects the token or the
                call fails
        """
        client = cls.get_client()

        try:
            response = client.auth.get_user(token)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Token verification failed: {e}",
                code="TOKEN_REJECTED",
            )

        user = getattr(response, "user", None) if response else None
        if user is None or not getattr(user, "id", None):
            return None

        return {"id": str(user.id), "email": user.email}

    @classmethod
    def sign_in_with_password(cls, email: str, password: str) -> dict[str, Any]:
        """
        Sign in with email and password.

        Returns:
            Dict with "token" (access token) and "user" ({"id", "email"})

        Raises:
            SupabaseClientError: If the credentials are rejected or no session
                is returned
        """
        client = cls.get_client()

        try:
            response = client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Sign-in failed: {e}",
                code="SIGN_IN_FAILED",
                details={"email": email},
            )

        if not response or response.session is None or response.user is None:
            raise SupabaseClientError(
                message="Sign-in returned no session",
                code="SIGN_IN_FAILED",
                details={"email": email},
            )

        return {
            "token": response.session.access_token,
            "user": {"id": str(response.user.id), "email": response.user.email},
        }

    @classmethod
    def sign_up(cls, email: str, password: str) -> dict[str, Any]:
        """
        Create a user in Supabase Auth.

        Returns:
            Dict with "user" ({"id", "email"}) and "token" - the access
            token, or None when sign-up does not open a session (e.g. email
            confirmation is enabled)

        Raises:
            SupabaseClientError: If the user could not be created
        """
        client = cls.get_client()

        try:
            response = client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            raise SupabaseClientError(
                message=f"Sign-up failed: {e}",
                code="SIGN_UP_FAILED",
                details={"email": email},
            )

        if not response or response.user is None:
            raise SupabaseClientError(
                message="Sign-up returned no user",
                code="SIGN_UP_FAILED",
                details={"email": email},
            )

        session = response.session
        return {
            "token": session.access_token if session else None,
            "user": {"id": str(response.user.id), "email": response.user.email},
        }

    # -------------------------------------------------------------------------
    # Profile Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_profile(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch the access-control record for a user.

        Args:
            user_id: The auth user UUID

        Returns:
            Profile dict {"id", "email", "role"}, or None if the user has
            no profile row

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table(PROFILES_TABLE)
                .select(PROFILE_COLUMNS)
                .eq("id", user_id_str)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch profile: {e}",
                code="FETCH_PROFILE_FAILED",
                details={"user_id": user_id_str},
            )

        rows = response.data or []
        return rows[0] if rows else None

    @classmethod
    def insert_profile(
        cls,
        user_id: str | UUID,
        email: str,
        role: str,
        name: str | None = None,
    ) -> dict[str, Any]:
        """
        Create the access-control record for a new user.

        Returns:
            The inserted profile row

        Raises:
            SupabaseClientError: If the insert fails or returns nothing
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        data = {"id": user_id_str, "email": email, "role": role}
        if name is not None:
            data["name"] = name

        try:
            response = client.table(PROFILES_TABLE).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert profile: {e}",
                code="INSERT_PROFILE_FAILED",
                details={"user_id": user_id_str},
            )

        if not response.data:
            raise SupabaseClientError(
                message="Profile insert returned no data",
                code="INSERT_PROFILE_FAILED",
                details={"user_id": user_id_str},
            )

        logger.info(f"Created profile for user: {user_id_str} with role: {role}")
        return response.data[0]
