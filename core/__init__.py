# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the document logic:
# - models/: Pydantic schemas for documents and profiles
# - services/: Document, storage and profile operations over Supabase
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable from scripts.
# =============================================================================
