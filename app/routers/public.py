# =============================================================================
# app/routers/public.py - Shared Document Endpoints
# =============================================================================
# Anonymous read access for documents opened from a shared link.
# Only public documents are returned; everything else is a 404.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path
from fastapi.responses import PlainTextResponse

from core.models.document import DocumentResponse
from core.services.document_service import DocumentService

router = APIRouter()


@router.get("/documents/{document_id}", response_model=DocumentResponse)
async def get_public_document(
    document_id: Annotated[UUID, Path(description="Document UUID")],
):
    """Get a public document with its content."""
    document = DocumentService.get_public_document(document_id)
    return DocumentResponse.from_document(document)


@router.get("/documents/{document_id}/raw", response_class=PlainTextResponse)
async def get_public_document_raw(
    document_id: Annotated[UUID, Path(description="Document UUID")],
):
    """Get a public document's markdown as text/markdown."""
    document = DocumentService.get_public_document(document_id)

    return PlainTextResponse(
        content=document.content,
        media_type="text/markdown; charset=utf-8",
    )
