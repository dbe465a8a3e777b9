# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    id: UUID
    email: Optional[str] = None

    model_config = {"frozen": True}


class UserResponse(BaseModel):
    """
    User profile returned by /auth/me.

    Backed by the public.profiles table.
    """
    id: UUID
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SignInRequest(BaseModel):
    """Email/password sign-in."""
    email: EmailStr = Field(..., examples=["writer@example.com"])
    password: str = Field(..., min_length=1, max_length=72)


class SignUpRequest(SignInRequest):
    """Email/password sign-up; the password must be entered twice."""
    confirm_password: str = Field(..., min_length=1, max_length=72)


class AuthSessionResponse(BaseModel):
    """
    Tokens returned after sign-in or sign-up.

    access_token is None when the project requires email confirmation
    before the first sign-in.
    """
    user: UserResponse
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: str = "bearer"
    email_confirmation_required: bool = False
