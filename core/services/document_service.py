# =============================================================================
# core/services/document_service.py - Document Business Logic
# =============================================================================
# CRUD over markdown documents. Each document is two backend objects:
# - a row in markdown_documents (metadata, visibility, storage_path)
# - a blob in storage holding the markdown text
#
# The two are kept in step on a best-effort basis, not transactionally:
# - create: insert row, upload blob, delete the row again if the upload fails
# - update: overwrite blob first, then update the row (no rollback)
# - delete: remove blob, then the row (no rollback)
#
# The service-role client bypasses RLS, so the visibility rules the
# database enforces for the anon key are re-checked here: owners can do
# everything, anyone can read a public document.
# =============================================================================

import logging
from typing import Any
from uuid import UUID, uuid4

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid, utc_now_iso
from app.config import settings
from app.exceptions import (
    DocumentNotFoundError,
    DocumentPersistError,
    DuplicateFileNameError,
    StorageDownloadError,
    StorageUploadError,
)
from core.models.document import Document, DocumentUpdate
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Service for markdown document operations.

    Provides a clean interface between API routes and the backend.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def list_documents(user_id: str | UUID) -> list[Document]:
        """
        List a user's documents, newest first, with their content.

        A document whose blob can't be downloaded is logged and left out
        rather than failing the whole listing.

        Args:
            user_id: Owner whose documents to list

        Returns:
            List of Documents
        """
        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table(settings.DOCUMENTS_TABLE)
                .select("*")
                .eq("user_id", user_id_str)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list documents for user {user_id_str}: {e}")
            raise

        documents = []
        for row in response.data or []:
            try:
                content = StorageService.download_markdown(DocumentService._storage_path(row))
            except StorageDownloadError as e:
                logger.warning(f"Error loading content for document {row.get('id')}: {e.message}")
                continue
            documents.append(Document.from_row(row, content))

        logger.debug(f"Loaded {len(documents)} documents for user {user_id_str}")
        return documents

    @staticmethod
    def get_document(
        document_id: str | UUID,
        user_id: str | UUID | None = None,
    ) -> Document | None:
        """
        Get a document with its content.

        Args:
            document_id: The document UUID
            user_id: The caller, or None for anonymous access

        Returns:
            The Document, or None if it doesn't exist, isn't visible to
            the caller, or its content can't be loaded
        """
        row = SupabaseClient.fetch_document_row(document_id)
        if not row:
            logger.info(f"Document not found: {document_id}")
            return None

        document = Document.from_row(row)
        if not document.is_visible_to(user_id):
            logger.info(f"Document {document_id} is not visible to {user_id or 'anonymous'}")
            return None

        try:
            document.content = StorageService.download_markdown(DocumentService._storage_path(row))
        except StorageDownloadError as e:
            logger.error(f"Error fetching document content for {document_id}: {e.message}")
            return None

        return document

    @staticmethod
    def require_document(
        document_id: str | UUID,
        user_id: str | UUID | None = None,
    ) -> Document:
        """
        Like get_document, but raises instead of returning None.

        Raises:
            DocumentNotFoundError: If the document isn't available to the caller
        """
        document = DocumentService.get_document(document_id, user_id=user_id)
        if document is None:
            raise DocumentNotFoundError(normalize_uuid(document_id))
        return document

    @staticmethod
    def get_public_document(document_id: str | UUID) -> Document:
        """
        Anonymous read used by shared links.

        Raises:
            DocumentNotFoundError: Unless the document exists and is public
        """
        document = DocumentService.get_document(document_id, user_id=None)
        if document is None or not document.is_public:
            raise DocumentNotFoundError(normalize_uuid(document_id))
        return document

    @staticmethod
    def file_name_exists(user_id: str | UUID, file_name: str) -> bool:
        """Check whether the user already has a document with this file name."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(settings.DOCUMENTS_TABLE)
                .select("id", count="exact", head=True)
                .eq("user_id", normalize_uuid(user_id))
                .eq("file_name", file_name)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to check file name {file_name}: {e}")
            raise

        return (response.count or 0) > 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @staticmethod
    def create_document(
        user_id: str | UUID,
        file_name: str,
        content: str,
        title: str | None = None,
        is_public: bool = False,
    ) -> Document:
        """
        Create a document: insert the row, then upload the blob.

        If the upload fails the just-inserted row is deleted again so no
        row is left pointing at a missing blob.

        Args:
            user_id: Owner of the new document
            file_name: File name (also used in the storage path)
            content: Markdown text
            title: Optional alias
            is_public: Initial visibility

        Returns:
            The created Document

        Raises:
            DuplicateFileNameError: If the owner already has this file name
            DocumentPersistError: If the row insert fails
            StorageUploadError: If the blob upload fails (row removed)
        """
        user_id_str = normalize_uuid(user_id)

        if DocumentService.file_name_exists(user_id_str, file_name):
            raise DuplicateFileNameError(file_name)

        document_id = str(uuid4())
        storage_path = StorageService.build_storage_path(user_id_str, file_name)

        data = {
            "id": document_id,
            "alias": title or None,
            "file_name": file_name,
            "user_id": user_id_str,
            "is_public": is_public,
            "storage_path": storage_path,
        }

        client = SupabaseClient.get_client()
        try:
            response = (
                client.table(settings.DOCUMENTS_TABLE)
                .insert(data)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to insert document row: {e}")
            raise DocumentPersistError("create", str(e))

        row = response.data[0] if response.data else data

        try:
            StorageService.upload_markdown(storage_path, content)
        except StorageUploadError:
            logger.warning(f"Removing document row {document_id} after failed upload")
            DocumentService._delete_row(document_id)
            raise

        logger.info(f"Created document: {document_id} for user: {user_id_str}")
        return Document.from_row(row, content)

    @staticmethod
    def create_blank_document(
        user_id: str | UUID,
        content: str = "",
        title: str | None = None,
        is_public: bool = False,
    ) -> Document:
        """"New document" action: same as create_document with a generated "<uuid>.md" name."""
        return DocumentService.create_document(
            user_id=user_id,
            file_name=f"{uuid4()}.md",
            content=content,
            title=title,
            is_public=is_public,
        )

    @staticmethod
    def update_document(
        document_id: str | UUID,
        user_id: str | UUID,
        changes: DocumentUpdate,
    ) -> Document:
        """
        Update content, title and/or visibility.

        Content goes to storage first, then the row is updated. If the row
        update fails after the blob was overwritten, the new content stays
        in place and the error is raised.

        Args:
            document_id: The document UUID
            user_id: Must be the owner
            changes: Fields to change; an empty title clears the alias.
                Sending no fields at all writes nothing.

        Returns:
            The updated Document with its current content

        Raises:
            DocumentNotFoundError: If missing or not owned by user_id
            StorageUploadError: If the content write fails
            DocumentPersistError: If the row update fails
        """
        row = DocumentService._get_owned_row(document_id, user_id)
        document_id_str = normalize_uuid(document_id)
        storage_path = DocumentService._storage_path(row)

        # Nothing sent: no writes, updated_at stays as it was
        if not changes.has_changes:
            logger.debug(f"Empty update for document {document_id_str}, nothing to write")
            return Document.from_row(row, StorageService.download_markdown(storage_path))

        if changes.content is not None:
            StorageService.update_markdown(storage_path, changes.content)

        update_data: dict[str, Any] = {"updated_at": utc_now_iso()}
        if "title" in changes.model_fields_set:
            update_data["alias"] = changes.title or None
        if changes.is_public is not None:
            update_data["is_public"] = changes.is_public

        client = SupabaseClient.get_client()
        try:
            response = (
                client.table(settings.DOCUMENTS_TABLE)
                .update(update_data)
                .eq("id", document_id_str)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update document {document_id_str}: {e}")
            raise DocumentPersistError("update", str(e), document_id_str)

        updated_row = response.data[0] if response.data else {**row, **update_data}

        if changes.content is not None:
            content = changes.content
        else:
            content = StorageService.download_markdown(storage_path)

        logger.info(f"Updated document: {document_id_str} ({', '.join(sorted(update_data))})")
        return Document.from_row(updated_row, content)

    @staticmethod
    def toggle_visibility(document_id: str | UUID, user_id: str | UUID) -> Document:
        """Flip is_public on an owned document."""
        row = DocumentService._get_owned_row(document_id, user_id)
        return DocumentService.update_document(
            document_id,
            user_id,
            DocumentUpdate(is_public=not row.get("is_public", False)),
        )

    @staticmethod
    def delete_document(document_id: str | UUID, user_id: str | UUID) -> None:
        """
        Delete the blob, then the row.

        If the row delete fails after the blob is gone, the row is left
        behind referencing a missing blob and the error is raised.

        Raises:
            DocumentNotFoundError: If missing or not owned by user_id
            StorageDeleteError: If the blob can't be removed (row untouched)
            DocumentPersistError: If the row delete fails
        """
        row = DocumentService._get_owned_row(document_id, user_id)
        document_id_str = normalize_uuid(document_id)

        StorageService.delete_file(DocumentService._storage_path(row))

        client = SupabaseClient.get_client()
        try:
            (
                client.table(settings.DOCUMENTS_TABLE)
                .delete()
                .eq("id", document_id_str)
                .execute()
            )
        except Exception as e:
            logger.error(f"Blob removed but row delete failed for {document_id_str}: {e}")
            raise DocumentPersistError("delete", str(e), document_id_str)

        logger.info(f"Deleted document: {document_id_str}")

    # -------------------------------------------------------------------------
    # Links
    # -------------------------------------------------------------------------

    @staticmethod
    def share_url(document_id: str | UUID) -> str:
        """
        Shareable front-end link for a document.

        Example:
            share_url("550e8400-...")  # "https://md.example.com/?docId=550e8400-..."
        """
        return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/?docId={normalize_uuid(document_id)}"

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _storage_path(row: dict[str, Any]) -> str:
        return row.get("storage_path") or StorageService.build_storage_path(
            row["user_id"], row["file_name"]
        )

    @staticmethod
    def _get_owned_row(document_id: str | UUID, user_id: str | UUID) -> dict[str, Any]:
        """Fetch a row the user owns; anything else looks like "not found"."""
        row = SupabaseClient.fetch_document_row(document_id)

        # Don't reveal that someone else's document exists
        if not row or str(row.get("user_id")) != str(user_id):
            raise DocumentNotFoundError(normalize_uuid(document_id))

        return row

    @staticmethod
    def _delete_row(document_id: str) -> None:
        """Compensating delete after a failed upload. Failure here is only logged."""
        client = SupabaseClient.get_client()
        try:
            client.table(settings.DOCUMENTS_TABLE).delete().eq("id", document_id).execute()
        except Exception as e:
            logger.error(f"Cleanup of document row {document_id} failed: {e}")
