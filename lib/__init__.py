# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper (singleton client, row fetches)
# - utils.py: Shared helpers (UUID normalization, timestamps, file names)
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError, is_not_found
from lib.utils import file_extension, normalize_uuid, safe_file_name, utc_now_iso

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "is_not_found",
    # Utils
    "file_extension",
    "normalize_uuid",
    "safe_file_name",
    "utc_now_iso",
]
