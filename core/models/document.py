# =============================================================================
# core/models/document.py - Document Schemas
# =============================================================================
# These models define the API contract for markdown documents:
# - Document: Domain object combining the metadata row and its content blob
# - DocumentCreate / DocumentUpdate: Inputs for authoring endpoints
# - DocumentResponse / DocumentSummary / DocumentList: Outputs
# - ShareLinkResponse: Shareable link for a document
#
# A document's metadata lives in the markdown_documents table while its
# markdown text lives in storage at "{user_id}/{file_name}".
# =============================================================================

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class Document(BaseModel):
    """
    A markdown file plus its metadata record.

    Built from a markdown_documents row (see from_row) with the content
    downloaded from storage.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "title": "Release notes",
            "file_name": "release-notes.md",
            "content": "# v1.2\\n...",
            "user_id": "660e8400-e29b-41d4-a716-446655440001",
            "is_public": false
        }
    """

    id: UUID = Field(..., description="Unique document identifier")

    # Stored in the "alias" column; None means "use the file name"
    title: str | None = Field(default=None, description="Optional display name")

    file_name: str = Field(..., description="File name, also the last part of the storage path")

    content: str = Field(default="", description="Markdown text")

    user_id: UUID = Field(..., description="Owner of the document")

    storage_path: str | None = Field(default=None, description="Storage key of the content blob")

    is_public: bool = Field(default=False, description="Readable by anyone with the link")

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_title(self) -> str:
        """Alias if set, otherwise the file name."""
        return self.title or self.file_name

    @classmethod
    def from_row(cls, row: dict[str, Any], content: str = "") -> "Document":
        """Build a Document from a markdown_documents row and its content."""
        return cls(
            id=row["id"],
            title=row.get("alias"),
            file_name=row.get("file_name") or "",
            content=content,
            user_id=row["user_id"],
            storage_path=row.get("storage_path"),
            is_public=bool(row.get("is_public", False)),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def is_visible_to(self, user_id: UUID | str | None) -> bool:
        """Owners see everything; everyone else only public documents."""
        if self.is_public:
            return True
        return user_id is not None and str(user_id) == str(self.user_id)


# =============================================================================
# Requests
# =============================================================================

class DocumentCreate(BaseModel):
    """
    Schema for the "new document" action.

    The file name is generated ("<uuid>.md") when omitted.

    Example:
        {
            "content": "# Hello",
            "title": "Greeting"
        }
    """

    content: str = Field(default="", description="Markdown text")

    title: str | None = Field(
        default=None,
        max_length=255,
        description="Optional display name"
    )

    file_name: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="File name; generated when omitted"
    )

    is_public: bool = Field(default=False, description="Publish immediately")

    @field_validator("file_name")
    @classmethod
    def _file_name_has_no_path(cls, value: str | None) -> str | None:
        if value is not None and ("/" in value or "\\" in value or value.strip(". ") == ""):
            raise ValueError("file_name must be a plain file name without directories")
        return value


class DocumentUpdate(BaseModel):
    """
    Schema for editing a document. Every field is optional.

    An empty title clears the alias so the file name is shown again.

    Example:
        {"title": "Renamed"}
        or
        {"content": "# Updated", "is_public": true}
    """

    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    is_public: bool | None = None

    @property
    def has_changes(self) -> bool:
        """True if the client sent at least one field."""
        return bool(self.model_fields_set)


# =============================================================================
# Responses
# =============================================================================

class DocumentSummary(BaseModel):
    """Document metadata without content, used in listings."""

    id: UUID
    title: str | None = None
    display_title: str
    file_name: str
    user_id: UUID
    is_public: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, document: Document) -> "DocumentSummary":
        return cls(
            id=document.id,
            title=document.title,
            display_title=document.display_title,
            file_name=document.file_name,
            user_id=document.user_id,
            is_public=document.is_public,
            created_at=document.created_at,
            updated_at=document.updated_at,
        )


class DocumentResponse(DocumentSummary):
    """Full document including the markdown content."""

    content: str

    @classmethod
    def from_document(cls, document: Document) -> "DocumentResponse":
        summary = DocumentSummary.from_document(document)
        return cls(**summary.model_dump(), content=document.content)


class DocumentList(BaseModel):
    """
    Schema for listing a user's documents, newest first.

    Example:
        {
            "documents": [...],
            "total": 3
        }
    """

    documents: list[DocumentResponse] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


class ShareLinkResponse(BaseModel):
    """
    Shareable link for a document.

    The link only works for other people while is_public is true.
    """

    document_id: UUID
    url: str
    is_public: bool
