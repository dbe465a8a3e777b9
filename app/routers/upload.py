# =============================================================================
# app/routers/upload.py - Markdown File Upload
# =============================================================================
# Handles markdown file uploads with validation and storage.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status

from app.auth import get_current_user, AuthUser
from app.config import settings
from app.exceptions import FileReadError, FileTooLargeError, InvalidFileTypeError
from core.models.document import DocumentResponse
from core.services.document_service import DocumentService
from lib.utils import file_extension, safe_file_name

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: Annotated[UploadFile, File(description="Markdown file to upload")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Upload a markdown file as a new private document.

    This endpoint:
    1. Validates the file (extension, size)
    2. Decodes it as UTF-8 text
    3. Creates the document row and stores the content

    The file name is kept as-is and must not clash with another of the
    user's documents. The document starts private and without an alias.
    """
    # =========================================================================
    # 1. Validate File
    # =========================================================================

    filename = safe_file_name(file.filename or "")
    if not filename:
        raise FileReadError(file.filename or "", "File has no name")

    if file_extension(filename) not in settings.allowed_extensions_list:
        raise InvalidFileTypeError(filename, settings.allowed_extensions_list)

    content_bytes = await file.read()
    file_size_bytes = len(content_bytes)
    file_size_mb = file_size_bytes / (1024 * 1024)

    if file_size_bytes > settings.max_upload_size_bytes:
        raise FileTooLargeError(file_size_mb, settings.MAX_UPLOAD_SIZE_MB)

    logger.info(f"Processing upload: {filename} ({file_size_mb:.2f}MB)")

    # =========================================================================
    # 2. Decode
    # =========================================================================

    try:
        # utf-8-sig drops the BOM some editors write
        content = content_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileReadError(filename, str(e))

    # =========================================================================
    # 3. Create Document
    # =========================================================================

    document = DocumentService.create_document(
        user_id=user.id,
        file_name=filename,
        content=content,
        title=None,
        is_public=False,
    )

    return DocumentResponse.from_document(document)
