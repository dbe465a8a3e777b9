# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Liveness and readiness for load balancers. Readiness means both halves
# of a document are reachable: the metadata table and the content bucket.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Callable

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Process is up and configured for an environment."""
    status: str
    timestamp: str
    environment: str
    version: str


class BackendChecks(BaseModel):
    """
    One entry per backend a document depends on.

    Each value is "healthy" or "unhealthy: <reason>".
    """
    documents_table: str
    storage_bucket: str


class ReadinessResponse(BaseModel):
    """"ready" only when rows and blobs can both be reached."""
    status: str
    checks: BackendChecks
    table: str
    bucket: str
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _run_check(name: str, check: Callable[[], object]) -> str:
    try:
        check()
        return "healthy"
    except Exception as e:
        logger.warning(f"Readiness check {name} failed: {e}")
        return f"unhealthy: {str(e)[:50]}"


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Cheap check that doesn't touch Supabase."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Check the documents table and the storage bucket.

    Returns "degraded" when either is unreachable; uploads and reads
    would fail in that state since every document needs both.
    """
    checks = BackendChecks(
        documents_table=_run_check(
            "documents_table",
            lambda: SupabaseClient.get_client().table(settings.DOCUMENTS_TABLE).select("id").limit(1).execute(),
        ),
        storage_bucket=_run_check(
            "storage_bucket",
            lambda: SupabaseClient.get_client().storage.get_bucket(settings.STORAGE_BUCKET),
        ),
    )

    ready = checks.documents_table == "healthy" and checks.storage_bucket == "healthy"

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        checks=checks,
        table=settings.DOCUMENTS_TABLE,
        bucket=settings.STORAGE_BUCKET,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    return LivenessResponse(status="alive", timestamp=_now())
