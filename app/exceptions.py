# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response has the shape {"error": "<human readable message>"}.
# Internal details (provider / store errors) are logged, never returned.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StoreAPIException(Exception):
    """
    Base exception for the LvlUp Store API.

    All custom exceptions inherit from this class. `code` and `details`
    are for logs only; clients only see `message`.
    """

    def __init__(
        self,
        message: str,
        code: str = "STORE_API_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.message}


# =============================================================================
# Authentication Exceptions (401)
# =============================================================================

class MissingCredentialError(StoreAPIException):
    """Raised when the request has no usable `Authorization: Bearer` header."""

    def __init__(self):
        super().__init__(
            message="Token no enviado",
            code="MISSING_CREDENTIAL",
            status_code=401,
        )


class InvalidCredentialError(StoreAPIException):
    """Raised when the identity provider rejects the token."""

    def __init__(self):
        super().__init__(
            message="Token inválido",
            code="INVALID_CREDENTIAL",
            status_code=401,
        )


class NotAuthenticatedError(StoreAPIException):
    """Raised when a role check runs without a resolved caller."""

    def __init__(self):
        super().__init__(
            message="No autenticado",
            code="NOT_AUTHENTICATED",
            status_code=401,
        )


class InvalidLoginError(StoreAPIException):
    """Raised when email/password sign-in fails."""

    def __init__(self):
        super().__init__(
            message="Credenciales inválidas",
            code="INVALID_LOGIN",
            status_code=401,
        )


# =============================================================================
# Authorization Exceptions (403)
# =============================================================================

class ProfileNotFoundError(StoreAPIException):
    """Raised when a valid token has no access-control record in `profiles`."""

    def __init__(self, user_id: str):
        super().__init__(
            message="Perfil no encontrado",
            code="PROFILE_NOT_FOUND",
            status_code=403,
            details={"user_id": user_id},
        )


class InvalidProfileError(StoreAPIException):
    """Raised when a profile carries a role this API does not know."""

    def __init__(self, user_id: str, role: Any):
        super().__init__(
            message="Perfil inválido",
            code="INVALID_PROFILE",
            status_code=403,
            details={"user_id": user_id, "role": role},
        )


class InsufficientRoleError(StoreAPIException):
    """Raised when the caller's role is not in the route's required set."""

    def __init__(self, role: str, required: list[str]):
        super().__init__(
            message="No tienes permisos para esta operación",
            code="INSUFFICIENT_ROLE",
            status_code=403,
            details={"role": role, "required": required},
        )


# =============================================================================
# Request Exceptions
# =============================================================================

class BadRequestError(StoreAPIException):
    """Raised for requests that pass validation but cannot be processed."""

    def __init__(self, message: str, code: str = "BAD_REQUEST"):
        super().__init__(message=message, code=code, status_code=400)


class ProductNotFoundError(StoreAPIException):
    """Raised when a product ID doesn't exist."""

    def __init__(self, product_id: int):
        super().__init__(
            message="Producto no encontrado",
            code="PRODUCT_NOT_FOUND",
            status_code=404,
            details={"product_id": product_id},
        )


# =============================================================================
# Store / Provider Exceptions (500)
# =============================================================================

class ProfileLookupError(StoreAPIException):
    """Raised when the store fails while resolving the caller's role."""

    def __init__(self, user_id: str, error: str):
        super().__init__(
            message="Error interno de autenticación",
            code="PROFILE_LOOKUP_FAILED",
            status_code=500,
            details={"user_id": user_id, "error": error},
        )


class StoreOperationError(StoreAPIException):
    """Raised when a read or write against the store fails."""

    def __init__(self, message: str, error: str, code: str = "STORE_OPERATION_FAILED"):
        super().__init__(
            message=message,
            code=code,
            status_code=500,
            details={"error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def store_api_exception_handler(
    request: Request,
    exc: StoreAPIException
) -> JSONResponse:
    """
    Convert StoreAPIException to JSON response.

    Server-side failures are logged with their details here; client
    errors were already logged where they were raised.
    """
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed [{exc.code}]: {exc.details}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors on request bodies and params.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "error": "Datos de entrada inválidos",
            "details": errors,
        }
    )
