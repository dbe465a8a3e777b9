# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the MarkShare API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
#   poetry run python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    MarkShareException,
    markshare_exception_handler,
    validation_exception_handler,
)
from app.routers import health, documents, upload, public
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
# httpx logs every Supabase request at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the effective configuration on startup and shutdown.
    """
    logger.info(f"Starting MarkShare API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Storage bucket: {settings.STORAGE_BUCKET}, table: {settings.DOCUMENTS_TABLE}")

    yield

    logger.info("Shutting down MarkShare API")


# Create FastAPI application
app = FastAPI(
    title="MarkShare API",
    description="""
## Markdown Document Publishing API

Upload or write markdown documents, keep them private or publish them,
and share links.

### How It Works

1. **Sign In** - Email/password or any Supabase Auth provider
2. **Upload or Create** - Upload a `.md` file or start a blank document
3. **Edit** - Update content and title
4. **Publish** - Toggle a document public and share its link

### Quick Start

```bash
# 1. Sign in
curl -X POST http://localhost:8000/api/v1/auth/signin \\
  -H "Content-Type: application/json" \\
  -d '{"email": "writer@example.com", "password": "secret123"}'

# 2. Upload a file
curl -X POST http://localhost:8000/api/v1/documents/upload \\
  -H "Authorization: Bearer $TOKEN" -F "file=@notes.md"

# 3. Publish it
curl -X POST http://localhost:8000/api/v1/documents/{id}/visibility \\
  -H "Authorization: Bearer $TOKEN"

# 4. Anyone can read it
curl http://localhost:8000/api/v1/public/documents/{id}/raw
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Sign up, sign in, sign out and profile",
        },
        {
            "name": "Documents",
            "description": "Create, edit, publish and delete markdown documents",
        },
        {
            "name": "Upload",
            "description": "Upload markdown files",
        },
        {
            "name": "Public",
            "description": "Read documents opened from a shared link",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(MarkShareException)
async def handle_markshare_exception(request: Request, exc: MarkShareException):
    """Handle custom MarkShare exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return await markshare_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request body/query validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# File upload endpoints (before documents so /upload isn't read as an id)
app.include_router(
    upload.router,
    prefix="/api/v1/documents",
    tags=["Upload"]
)

# Document CRUD endpoints
app.include_router(
    documents.router,
    prefix="/api/v1/documents",
    tags=["Documents"]
)

# Shared link endpoints (no auth)
app.include_router(
    public.router,
    prefix="/api/v1/public",
    tags=["Public"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "MarkShare API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
