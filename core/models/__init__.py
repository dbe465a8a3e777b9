# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - document.py: Document domain object and its request/response schemas
# - profile.py: User profile row
#
# These models define the "contract" between API and clients.
# =============================================================================

from .document import (
    Document,
    DocumentCreate,
    DocumentList,
    DocumentResponse,
    DocumentSummary,
    DocumentUpdate,
    ShareLinkResponse,
)
from .profile import UserProfile

__all__ = [
    # Document
    "Document",
    "DocumentCreate",
    "DocumentList",
    "DocumentResponse",
    "DocumentSummary",
    "DocumentUpdate",
    "ShareLinkResponse",
    # Profile
    "UserProfile",
]
