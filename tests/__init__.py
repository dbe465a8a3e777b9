# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the MarkShare API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_storage_service.py: Blob read/write/delete
# - test_document_service.py: Document lifecycle and visibility rules
# - test_auth.py: JWT verification and auth endpoints
# - test_routes.py: API endpoints through TestClient
# - test_import_script.py: Bulk import script
#
# Run tests with: poetry run pytest
# =============================================================================
