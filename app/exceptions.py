# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error tells the client HOW to fix it, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class MarkShareException(Exception):
    """
    Base exception for the MarkShare API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "MARKSHARE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Document Exceptions
# =============================================================================

class DocumentNotFoundError(MarkShareException):
    """Raised when a document doesn't exist or isn't visible to the caller."""

    def __init__(self, document_id: str):
        super().__init__(
            message=f"Document not found or not available: {document_id}",
            code="DOCUMENT_NOT_FOUND",
            status_code=404,
            suggestion="Check the document link, or ask the owner to make it public",
            details={"document_id": document_id}
        )


class DuplicateFileNameError(MarkShareException):
    """Raised when the owner already has a document with this file name."""

    def __init__(self, file_name: str):
        super().__init__(
            message=f"A document named {file_name} already exists",
            code="DUPLICATE_FILE_NAME",
            status_code=409,
            suggestion="Rename the file before uploading, or edit the existing document",
            details={"file_name": file_name}
        )


class DocumentPersistError(MarkShareException):
    """Raised when a document row cannot be written or removed."""

    def __init__(self, action: str, error: str, document_id: str | None = None):
        details = {"action": action, "error": error}
        if document_id:
            details["document_id"] = document_id
        super().__init__(
            message=f"Failed to {action} document: {error}",
            code="DOCUMENT_PERSIST_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details=details
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(MarkShareException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(MarkShareException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class FileReadError(MarkShareException):
    """Raised when an uploaded file is not readable markdown text."""

    def __init__(self, filename: str, error: str):
        super().__init__(
            message=f"Failed to read file: {error}",
            code="FILE_READ_ERROR",
            status_code=400,
            suggestion="Check that the file is UTF-8 encoded text",
            details={"filename": filename, "error": error}
        )


# =============================================================================
# Storage Exceptions
# =============================================================================

class StorageUploadError(MarkShareException):
    """Raised when writing a blob to storage fails."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"path": path, "error": error}
        )


class StorageDownloadError(MarkShareException):
    """Raised when reading a blob from storage fails."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to download file from storage: {error}",
            code="STORAGE_DOWNLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"path": path, "error": error}
        )


class StorageDeleteError(MarkShareException):
    """Raised when removing a blob from storage fails."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to delete file from storage: {error}",
            code="STORAGE_DELETE_ERROR",
            status_code=500,
            suggestion="Try again later; the document has not been deleted",
            details={"path": path, "error": error}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthenticationError(MarkShareException):
    """Raised when Supabase Auth rejects a sign-in, sign-up or sign-out."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Authentication failed: {error}",
            code="AUTHENTICATION_FAILED",
            status_code=401,
            suggestion="Check your email and password and try again",
            details={"error": error}
        )


class PasswordValidationError(MarkShareException):
    """Raised when a password fails local checks before reaching Supabase."""

    def __init__(self, reason: str):
        super().__init__(
            message=reason,
            code="INVALID_PASSWORD",
            status_code=400,
            suggestion="Choose a longer password and make sure both entries match",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def markshare_exception_handler(
    request: Request,
    exc: MarkShareException
) -> JSONResponse:
    """
    Convert MarkShareException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Convert request validation errors to the common error shape."""
    errors = jsonable_encoder(exc.errors()) if hasattr(exc, "errors") else str(exc)
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
