# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the LvlUp Store API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 3001
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    StoreAPIException,
    store_api_exception_handler,
    validation_exception_handler,
)
from app.routers import health, products, orders
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    The Supabase client is created lazily on first use, so there is
    nothing to open or close here beyond logging.
    """
    logger.info(f"Starting LvlUp Store API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list if settings.is_production else ['*']}")

    yield

    logger.info("Shutting down LvlUp Store API")


# Create FastAPI application
app = FastAPI(
    title="LvlUp Store API",
    description="""
## LvlUp Gamer Store API

REST backend for the LvlUp gamer store. Identity and data live in Supabase.

### Authorization

Send `Authorization: Bearer <token>` (from `/api/v1/auth/login`).
Your role comes from your profile:

| Role | Can |
|------|-----|
| **customer** | place orders, list own orders |
| **admin** | manage products, list all orders |

Errors are returned as `{"error": "<message>"}`.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Login, registration and the current user",
        },
        {
            "name": "Products",
            "description": "Product catalog (writes are admin only)",
        },
        {
            "name": "Orders",
            "description": "Place and list orders",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests from the storefront
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(StoreAPIException)
async def handle_store_api_exception(request: Request, exc: StoreAPIException):
    """Handle custom Store API exceptions."""
    return await store_api_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle invalid request bodies and parameters."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Error interno"}
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints (/auth/login, /auth/register, /me)
app.include_router(
    auth_routes.router,
    prefix="/api/v1",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Product catalog endpoints
app.include_router(
    products.router,
    prefix="/api/v1/products",
    tags=["Products"]
)

# Order endpoints
app.include_router(
    orders.router,
    prefix="/api/v1/orders",
    tags=["Orders"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "LvlUp Store API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
