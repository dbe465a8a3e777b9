# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - documents.py: Document CRUD, visibility and share links
# - upload.py: Markdown file upload
# - public.py: Anonymous access to public documents
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import documents
from . import upload
from . import public

__all__ = [
    "health",
    "documents",
    "upload",
    "public",
]
