# =============================================================================
# app/routers/documents.py - Document CRUD Endpoints
# =============================================================================
# Authoring endpoints for a signed-in user's markdown documents.
# All endpoints require authentication.
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import get_current_user, AuthUser
from core.models.document import (
    DocumentCreate,
    DocumentList,
    DocumentResponse,
    DocumentUpdate,
    ShareLinkResponse,
)
from core.services.document_service import DocumentService
from lib.utils import safe_file_name

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DocumentList)
async def list_documents(
    user: AuthUser = Depends(get_current_user),
):
    """
    List the user's documents, newest first, including content.

    Documents whose content can't be loaded are left out.
    """
    documents = DocumentService.list_documents(user.id)

    return DocumentList(
        documents=[DocumentResponse.from_document(doc) for doc in documents],
        total=len(documents),
    )


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    request: DocumentCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a document from the editor.

    Without a file_name this is the "new document" action and the file
    is named "<uuid>.md".
    """
    if request.file_name:
        document = DocumentService.create_document(
            user_id=user.id,
            file_name=safe_file_name(request.file_name),
            content=request.content,
            title=request.title,
            is_public=request.is_public,
        )
    else:
        document = DocumentService.create_blank_document(
            user_id=user.id,
            content=request.content,
            title=request.title,
            is_public=request.is_public,
        )

    return DocumentResponse.from_document(document)


@router.get("/exists")
async def file_name_exists(
    file_name: Annotated[str, Query(min_length=1, max_length=255, description="File name to check")],
    user: AuthUser = Depends(get_current_user),
):
    """Check whether the user already has a document with this file name."""
    name = safe_file_name(file_name)
    return {
        "file_name": name,
        "exists": DocumentService.file_name_exists(user.id, name),
    }


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: Annotated[UUID, Path(description="Document UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Get a document with its content.

    Works for the user's own documents and for anyone's public ones.
    """
    document = DocumentService.require_document(document_id, user_id=user.id)
    return DocumentResponse.from_document(document)


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: Annotated[UUID, Path(description="Document UUID")],
    request: DocumentUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update content, title and/or visibility.

    Send an empty title to fall back to the file name.
    User must own the document.
    """
    document = DocumentService.update_document(document_id, user.id, request)
    return DocumentResponse.from_document(document)


@router.post("/{document_id}/visibility", response_model=DocumentResponse)
async def toggle_visibility(
    document_id: Annotated[UUID, Path(description="Document UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Toggle a document between public and private."""
    document = DocumentService.toggle_visibility(document_id, user.id)
    logger.info(f"Document {document_id} is now {'public' if document.is_public else 'private'}")
    return DocumentResponse.from_document(document)


@router.get("/{document_id}/share", response_model=ShareLinkResponse)
async def get_share_link(
    document_id: Annotated[UUID, Path(description="Document UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Get the shareable link for a document.

    Other people can only open the link while the document is public.
    """
    document = DocumentService.require_document(document_id, user_id=user.id)

    return ShareLinkResponse(
        document_id=document.id,
        url=DocumentService.share_url(document.id),
        is_public=document.is_public,
    )


@router.delete("/{document_id}")
async def delete_document(
    document_id: Annotated[UUID, Path(description="Document UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a document and its stored content.

    User must own the document.
    """
    DocumentService.delete_document(document_id, user.id)

    return {
        "document_id": str(document_id),
        "message": "Document deleted successfully",
    }
