# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles reading and writing markdown blobs in Supabase Storage.
# Blobs are keyed "{user_id}/{file_name}" so storage policies can check
# ownership from the first folder of the path.
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from app.config import settings
from app.exceptions import StorageUploadError, StorageDownloadError, StorageDeleteError

logger = logging.getLogger(__name__)

MARKDOWN_CONTENT_TYPE = "text/markdown; charset=utf-8"


class StorageService:
    """
    Service for Supabase Storage operations.

    Every failure is raised as a MarkShareException subclass; callers
    decide whether to compensate.
    """

    @staticmethod
    def _bucket():
        return SupabaseClient.get_client().storage.from_(settings.STORAGE_BUCKET)

    @staticmethod
    def build_storage_path(user_id: str | UUID, file_name: str) -> str:
        """
        Storage key for a user's file.

        Example:
            build_storage_path("660e8400-...", "notes.md")  # "660e8400-.../notes.md"
        """
        return f"{normalize_uuid(user_id)}/{file_name}"

    @staticmethod
    def upload_markdown(storage_path: str, content: str) -> str:
        """
        Create a new blob. Fails if one already exists at the path.

        Args:
            storage_path: Path in storage bucket
            content: Markdown text (stored as UTF-8)

        Returns:
            The storage path

        Raises:
            StorageUploadError: If upload fails
        """
        try:
            StorageService._bucket().upload(
                path=storage_path,
                file=content.encode("utf-8"),
                file_options={"content-type": MARKDOWN_CONTENT_TYPE},
            )
            logger.info(f"Uploaded file to storage: {storage_path}")
            return storage_path

        except Exception as e:
            logger.error(f"Storage upload failed for {storage_path}: {e}")
            raise StorageUploadError(storage_path, str(e))

    @staticmethod
    def update_markdown(storage_path: str, content: str) -> str:
        """
        Overwrite an existing blob.

        Raises:
            StorageUploadError: If the blob is missing or the write fails
        """
        try:
            StorageService._bucket().update(
                path=storage_path,
                file=content.encode("utf-8"),
                file_options={"content-type": MARKDOWN_CONTENT_TYPE},
            )
            logger.info(f"Updated file in storage: {storage_path}")
            return storage_path

        except Exception as e:
            logger.error(f"Storage update failed for {storage_path}: {e}")
            raise StorageUploadError(storage_path, str(e))

    @staticmethod
    def download_markdown(storage_path: str) -> str:
        """
        Download a blob and decode it as UTF-8 text.

        Raises:
            StorageDownloadError: If download or decoding fails
        """
        try:
            data = StorageService._bucket().download(storage_path)
            logger.debug(f"Downloaded file from storage: {storage_path} ({len(data)} bytes)")
            return data.decode("utf-8")

        except Exception as e:
            logger.error(f"Storage download failed for {storage_path}: {e}")
            raise StorageDownloadError(storage_path, str(e))

    @staticmethod
    def delete_file(storage_path: str) -> None:
        """
        Delete a blob from storage.

        Raises:
            StorageDeleteError: If removal fails
        """
        try:
            StorageService._bucket().remove([storage_path])
            logger.info(f"Deleted file from storage: {storage_path}")

        except Exception as e:
            logger.error(f"Failed to delete file {storage_path}: {e}")
            raise StorageDeleteError(storage_path, str(e))
