# =============================================================================
# core/services/auth_service.py - Login & Registration Logic
# =============================================================================
# Wraps Supabase Auth sign-in / sign-up and the matching profile record.
# New accounts always start as customers; promotion to admin is done in
# the profiles table, never through this API.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.profile import Role
from app.exceptions import (
    BadRequestError,
    InvalidLoginError,
    InvalidProfileError,
    ProfileLookupError,
    ProfileNotFoundError,
    StoreOperationError,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Service for login and registration."""

    @staticmethod
    def role_of(profile: dict[str, Any]) -> Role:
        """
        Read the role from a profile row.

        Raises:
            InvalidProfileError: If the stored role is not a known Role
        """
        try:
            return Role(profile.get("role"))
        except ValueError:
            logger.warning(f"Profile {profile.get('id')} has unknown role: {profile.get('role')!r}")
            raise InvalidProfileError(str(profile.get("id")), profile.get("role"))

    @staticmethod
    def login(email: str, password: str) -> dict[str, Any]:
        """
        Sign in and return the token with the user's profile.

        Returns:
            {"token": str, "user": profile}

        Raises:
            InvalidLoginError: If Supabase rejects the credentials
            ProfileNotFoundError: If the user has no profile row
            ProfileLookupError: If the profile query fails
        """
        try:
            session = SupabaseClient.sign_in_with_password(email, password)
        except SupabaseClientError as e:
            logger.warning(f"Login failed for {email}: {e}")
            raise InvalidLoginError()

        user_id = session["user"]["id"]

        try:
            profile = SupabaseClient.fetch_profile(user_id)
        except SupabaseClientError as e:
            raise ProfileLookupError(user_id, str(e))

        if profile is None:
            logger.warning(f"Login for user {user_id} has no profile")
            raise ProfileNotFoundError(user_id)

        AuthService.role_of(profile)

        logger.info(f"User logged in: {user_id}")
        return {"token": session["token"], "user": profile}

    @staticmethod
    def register(name: str, email: str, password: str) -> dict[str, Any]:
        """
        Create the auth user and its customer profile, then open a session.

        Returns:
            {"token": str, "user": profile}

        Raises:
            BadRequestError: If Supabase refuses to create the user
            StoreOperationError: If the profile insert or the follow-up
                sign-in fails
        """
        try:
            signup = SupabaseClient.sign_up(email, password)
        except SupabaseClientError as e:
            logger.warning(f"Sign-up failed for {email}: {e}")
            raise BadRequestError("No se pudo crear el usuario", code="SIGN_UP_FAILED")

        user_id = signup["user"]["id"]

        try:
            profile = SupabaseClient.insert_profile(
                user_id,
                email=email,
                role=Role.CUSTOMER.value,
                name=name,
            )
        except SupabaseClientError as e:
            raise StoreOperationError(
                "Usuario creado, pero fallo al guardar perfil",
                str(e),
                code="PROFILE_INSERT_FAILED",
            )

        # Sign-up only returns a session when email confirmation is disabled
        token = signup["token"]
        if not token:
            try:
                token = SupabaseClient.sign_in_with_password(email, password)["token"]
            except SupabaseClientError as e:
                raise StoreOperationError(
                    "Usuario creado, pero sin sesión",
                    str(e),
                    code="SESSION_FAILED",
                )

        logger.info(f"Registered user: {user_id}")
        return {"token": token, "user": profile}
