# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the LvlUp Store API:
# - test_auth.py: Credential resolver and role gate
# - test_auth_routes.py: Login, registration
# - test_products.py / test_orders.py: Catalog and order endpoints
# - test_models.py: Pydantic model validation
# - test_supabase_client.py: Supabase wrapper error mapping
# - test_health.py: Health endpoints
#
# Run tests with: pytest
# =============================================================================
