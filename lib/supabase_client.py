# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper around the supabase-py client.
# It implements the singleton pattern to reuse a single service-role
# connection and provides specialized row fetches for:
# - Document metadata rows (markdown_documents)
# - User profile rows (profiles)
#
# Password sign-in/sign-up needs a client bound to the anon key instead,
# see get_auth_client().
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   row = SupabaseClient.fetch_document_row(document_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

logger = logging.getLogger(__name__)

# PostgREST error code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


def is_not_found(exc: Exception) -> bool:
    """Return True if a PostgREST error means "no rows matched"."""
    return NO_ROWS_CODE in str(exc)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries an error code and a suggestion telling the operator how to
    fix the problem, not just what failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    One service-role client instance is shared across the application.
    All methods are class methods for easy access without instantiation.

    Example:
        row = SupabaseClient.fetch_document_row("550e8400-...")
        if row and row["is_public"]:
            ...
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses the service_role key which bypasses Row Level Security (RLS),
        so callers are responsible for ownership and visibility checks.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def get_auth_client(cls) -> Client:
        """
        Create a fresh client bound to the anon key.

        Sign-in stores the user's session on the client, so this one is
        never shared between requests.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase auth client: {e}",
                code="AUTH_CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # Document Rows
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_document_row(cls, document_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a document metadata row by ID.

        Only the row is returned; the markdown content lives in storage
        under row["storage_path"].

        Args:
            document_id: The document UUID

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        document_id_str = cls._normalize_uuid(document_id)

        try:
            response = (
                client.table(settings.DOCUMENTS_TABLE)
                .select("*")
                .eq("id", document_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch document: {e}",
                code="FETCH_DOCUMENT_FAILED",
                suggestion="Check that the document_id exists",
                details={"document_id": document_id_str}
            )

    # -------------------------------------------------------------------------
    # Profile Rows
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_profile(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a user's profile row.

        Args:
            user_id: The auth user UUID

        Returns:
            Profile dict, or None if the user has no profile yet

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table(settings.PROFILES_TABLE)
                .select("*")
                .eq("id", user_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch profile: {e}",
                code="FETCH_PROFILE_FAILED",
                details={"user_id": user_id_str}
            )
