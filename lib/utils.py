# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Small helpers used by services and routers.
# =============================================================================

from datetime import datetime, timezone
from pathlib import PurePosixPath
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        document_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        document_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string, the format PostgREST accepts."""
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# File Name Utilities
# =============================================================================

def file_extension(filename: str) -> str:
    """
    Lower-cased extension including the dot, or "" when there is none.

    Example:
        file_extension("Notes.MD")  # ".md"
        file_extension("README")    # ""
    """
    return "." + filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def safe_file_name(filename: str) -> str:
    """
    Strip any directory components from a client-supplied file name.

    Storage keys are "{user_id}/{file_name}", so a name containing "/"
    would escape the owner's folder. Names made only of dots come back
    empty.
    """
    name = PurePosixPath(filename.replace("\\", "/")).name.strip()
    return "" if name.strip(".") == "" else name
