"""Business logic for image deletion.

This module coordinates deletion of a stored file and its record.
The file is removed from blob storage first; a storage failure is logged
and reported but does not keep the record alive. The record is then
removed from the metadata store.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.dependencies import get_blob_storage, get_metadata_store
from core.models.errors import BlobStorageError, ImageServiceError, NotFoundError
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import BlobStorageRepository
from core.utils.constants import (
    ERROR_CODE_IMAGE_NOT_FOUND,
    ERROR_CODE_METADATA_DELETE_FAILED,
)
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting files and their records."""

    def __init__(
        self,
        metadata: ImageMetadataRepository | None = None,
        storage: BlobStorageRepository | None = None,
    ) -> None:
        self.metadata = metadata or get_metadata_store()
        self.storage = storage or get_blob_storage()

    def delete_image(self, image_id: str) -> dict[str, Any]:
        """
        Delete a file and its record.

        Args:
            image_id: Id of the record to delete

        Returns:
            Dict with image_id, blob_deleted and deleted_at

        Raises:
            NotFoundError: If no record has this id
            ImageServiceError: If the record disappeared before it could be removed
            StoreUnavailableError: If the metadata store cannot be read or written
        """
        record = self.metadata.get_by_id(image_id, sanitize=False)
        if record is None:
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"image_id": image_id},
            )

        blob_deleted = self._remove_blob(record.locator(), image_id)

        if not self.metadata.delete_by_id(image_id):
            logger.error("Record vanished during delete", extra={"image_id": image_id})
            raise ImageServiceError(
                message="Failed to delete image record",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"image_id": image_id},
            )

        logger.info(
            "Image deleted",
            extra={"image_id": image_id, "blob_deleted": blob_deleted},
        )

        return {
            "image_id": image_id,
            "blob_deleted": blob_deleted,
            "deleted_at": utc_now_iso(),
        }

    def _remove_blob(self, locator, image_id: str) -> bool:
        if locator is None:
            logger.warning("Record has no storage locator", extra={"image_id": image_id})
            return False

        try:
            self.storage.remove_blob(locator=locator)
        except BlobStorageError as exc:
            logger.warning(
                "Blob removal failed, deleting record anyway",
                extra={"image_id": image_id, "error_code": exc.error_code},
            )
            return False

        return True
