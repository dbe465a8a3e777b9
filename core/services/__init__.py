# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .storage_service import StorageService
from .document_service import DocumentService
from .profile_service import ProfileService

__all__ = [
    "StorageService",
    "DocumentService",
    "ProfileService",
]
