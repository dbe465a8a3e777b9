# =============================================================================
# core/models/profile.py - User Profile Schema
# =============================================================================
# One profile row exists per Supabase Auth user. It is created on first
# sign-in if the database trigger hasn't done so already.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class UserProfile(BaseModel):
    """Row in the profiles table."""

    id: UUID
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
