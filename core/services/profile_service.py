# =============================================================================
# core/services/profile_service.py - User Profile Operations
# =============================================================================
# Makes sure every authenticated user has a row in the profiles table.
# A database trigger normally creates it on sign-up; this covers users
# created before the trigger existed or when the trigger failed.
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from app.config import settings
from core.models.profile import UserProfile

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for the profiles table."""

    @staticmethod
    def get_profile(user_id: str | UUID) -> UserProfile | None:
        row = SupabaseClient.fetch_profile(user_id)
        return UserProfile(**row) if row else None

    @staticmethod
    def ensure_profile(user_id: str | UUID, email: str | None) -> UserProfile:
        """
        Return the user's profile, inserting it first if it's missing.

        Raises:
            Exception: If the insert fails
        """
        existing = ProfileService.get_profile(user_id)
        if existing:
            return existing

        user_id_str = normalize_uuid(user_id)
        logger.info(f"Creating new profile for user: {user_id_str}")

        client = SupabaseClient.get_client()
        try:
            response = (
                client.table(settings.PROFILES_TABLE)
                .insert({"id": user_id_str, "email": email})
                .execute()
            )
        except Exception as e:
            logger.error(f"Error creating user profile: {e}")
            raise

        if response.data:
            return UserProfile(**response.data[0])
        return UserProfile(id=user_id_str, email=email)
