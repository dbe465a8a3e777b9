# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Email/password sign-up, sign-in and sign-out against Supabase Auth, plus
# endpoints for the signed-in user's profile.
#
# OAuth providers are handled by the browser talking to Supabase directly;
# the resulting access token works with every endpoint here.
# =============================================================================

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from app.auth.dependencies import get_current_user, security
from app.auth.models import (
    AuthSessionResponse,
    AuthUser,
    SignInRequest,
    SignUpRequest,
    UserResponse,
)
from app.config import settings
from app.exceptions import AuthenticationError, PasswordValidationError
from core.services.profile_service import ProfileService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helper Functions
# =============================================================================

def _validate_password(password: str, confirm_password: str) -> None:
    """Sign-up checks run before the request reaches Supabase."""
    if password != confirm_password:
        raise PasswordValidationError("Passwords do not match")
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise PasswordValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
        )


def _session_response(result: Any) -> AuthSessionResponse:
    """Convert a supabase-py AuthResponse into our response model."""
    user = result.user
    session = result.session

    return AuthSessionResponse(
        user=UserResponse(
            id=user.id,
            email=user.email,
            created_at=getattr(user, "created_at", None),
            updated_at=getattr(user, "updated_at", None),
        ),
        access_token=session.access_token if session else None,
        refresh_token=session.refresh_token if session else None,
        expires_in=session.expires_in if session else None,
        email_confirmation_required=session is None,
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/signup", response_model=AuthSessionResponse)
async def sign_up(request: SignUpRequest) -> AuthSessionResponse:
    """
    Create an account with email and password.

    Returns tokens right away unless the project requires email
    confirmation, in which case email_confirmation_required is true.
    """
    _validate_password(request.password, request.confirm_password)

    client = SupabaseClient.get_auth_client()
    try:
        result = client.auth.sign_up({"email": request.email, "password": request.password})
    except Exception as e:
        logger.warning(f"Sign-up failed for {request.email}: {e}")
        raise AuthenticationError(str(e))

    if result.user is None:
        raise AuthenticationError("Sign-up returned no user")

    if result.session is not None:
        ProfileService.ensure_profile(result.user.id, result.user.email)

    logger.info(f"Signed up user: {result.user.id}")
    return _session_response(result)


@router.post("/signin", response_model=AuthSessionResponse)
async def sign_in(request: SignInRequest) -> AuthSessionResponse:
    """
    Sign in with email and password.

    Password rules are only enforced on sign-up; accounts created
    under an older policy must still be able to sign in.
    Also makes sure the user has a profile row.
    """
    client = SupabaseClient.get_auth_client()
    try:
        result = client.auth.sign_in_with_password(
            {"email": request.email, "password": request.password}
        )
    except Exception as e:
        logger.warning(f"Sign-in failed for {request.email}: {e}")
        raise AuthenticationError(str(e))

    if result.user is None or result.session is None:
        raise AuthenticationError("Invalid login credentials")

    ProfileService.ensure_profile(result.user.id, result.user.email)

    logger.info(f"Signed in user: {result.user.id}")
    return _session_response(result)


@router.post("/signout")
async def sign_out(
    user: AuthUser = Depends(get_current_user),
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Sign out everywhere.

    Revokes every refresh token of the user. Access tokens already issued
    stay valid until they expire.
    """
    client = SupabaseClient.get_client()
    try:
        client.auth.admin.sign_out(credentials.credentials, "global")
    except Exception as e:
        logger.warning(f"Sign-out failed for {user.id}: {e}")
        raise AuthenticationError(str(e))

    logger.info(f"Signed out user: {user.id}")
    return {"signed_out": True, "user_id": str(user.id)}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user's profile.

    Creates the profile row on the fly if it doesn't exist yet.
    """
    try:
        profile = ProfileService.ensure_profile(user.id, user.email)
        return UserResponse(**profile.model_dump())

    except Exception as e:
        logger.warning(f"Could not load user profile: {e}")

    # Token is valid even if the profile table is unreachable
    return UserResponse(id=user.id, email=user.email)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
