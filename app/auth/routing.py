# =============================================================================
# app/auth/routing.py - Bearer-First Route Class
# =============================================================================
# FastAPI reads and decodes the request body before it resolves
# dependencies. On routes that depend on get_current_user, this route class
# checks for a bearer token first, so a request without one always gets
# 401, even when its body is malformed.
#
# Usage:
#   router = APIRouter(route_class=BearerFirstRoute)
#
# Routes without get_current_user in their dependency tree are unaffected.
# =============================================================================

import logging
from typing import Callable

from fastapi import Request, Response
from fastapi.dependencies.models import Dependant
from fastapi.routing import APIRoute

from app.auth.dependencies import get_current_user, security
from app.exceptions import MissingCredentialError

logger = logging.getLogger(__name__)


def requires_user(dependant: Dependant) -> bool:
    """True if get_current_user appears anywhere in the dependency tree."""
    return any(
        sub.call is get_current_user or requires_user(sub)
        for sub in dependant.dependencies
    )


class BearerFirstRoute(APIRoute):
    """Route that rejects missing bearer tokens before the body is parsed."""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()
        if not requires_user(self.dependant):
            return handler

        async def bearer_first_handler(request: Request) -> Response:
            credentials = await security(request)
            if credentials is None or not credentials.credentials.strip():
                logger.warning(f"Rejected {request.method} {request.url.path} without bearer token")
                raise MissingCredentialError()
            return await handler(request)

        return bearer_first_handler
