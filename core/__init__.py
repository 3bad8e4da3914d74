# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the store's business logic:
# - models/: Pydantic schemas for roles, products and orders
# - services/: Login/registration, product and order operations
#
# Code in this package should NOT import from FastAPI.
# =============================================================================
