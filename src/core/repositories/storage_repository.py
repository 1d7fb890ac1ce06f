"""Abstract contract for blob storage."""

from abc import ABC, abstractmethod

from core.models.record import BlobLocator


class BlobStorageRepository(ABC):
    """Contract for storing and retrieving uploaded files as opaque blobs.

    Implementations could be S3, a messaging API, local disk, etc.
    Handlers depend on this interface, not the implementation.
    """

    @abstractmethod
    def upload_blob(
        self,
        *,
        blob_name: str,
        file_data: bytes,
        mime_type: str,
    ) -> BlobLocator:
        """Upload a file and return the locator needed to reach it again.

        Args:
            blob_name: Original file name, kept as storage metadata
            file_data: Binary file content
            mime_type: MIME type (e.g., 'image/jpeg')

        Returns:
            Locator of the stored blob

        Raises:
            BlobUploadFailedError: If upload fails
        """

    @abstractmethod
    def download_blob(self, *, locator: BlobLocator) -> tuple[bytes, str, int]:
        """Download a blob.

        Returns:
            Tuple of (content_bytes, content_type, content_length)

        Raises:
            NotFoundError: If the blob doesn't exist
            BlobDownloadFailedError: If download fails
        """

    @abstractmethod
    def remove_blob(self, *, locator: BlobLocator) -> None:
        """Delete a blob.

        Raises:
            BlobDeletionFailedError: If deletion fails
        """
