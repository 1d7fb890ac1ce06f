"""
Business logic for serving stored files through the CDN endpoint.
"""

from aws_lambda_powertools import Logger

from core.dependencies import get_blob_storage, get_metadata_store
from core.models.errors import NotFoundError
from core.models.record import ImageRecord
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import BlobStorageRepository
from core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND

logger = Logger(UTC=True)


class GetService:
    """Application service responsible for retrieving files.

    This service orchestrates:
    - Fetching the raw record (the locator is needed to reach the blob)
    - Downloading the blob from storage
    """

    def __init__(
        self,
        metadata: ImageMetadataRepository | None = None,
        storage: BlobStorageRepository | None = None,
    ) -> None:
        self.metadata = metadata or get_metadata_store()
        self.storage = storage or get_blob_storage()

    def get_record(self, image_id: str) -> ImageRecord:
        """Return the raw record for `image_id`.

        Raises:
            NotFoundError: If no record has this id
            StoreUnavailableError: If the metadata store cannot be read
        """
        record = self.metadata.get_by_id(image_id, sanitize=False)

        if record is None:
            logger.warning("Image record not found", extra={"image_id": image_id})
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"image_id": image_id},
            )

        return record

    def fetch_content(self, record: ImageRecord) -> tuple[bytes, str]:
        """Download the file behind `record`.

        Returns:
            Tuple of (content_bytes, content_type)

        Raises:
            NotFoundError: If the record has no locator or the blob is gone
            BlobDownloadFailedError: If the download fails
        """
        locator = record.locator()
        if locator is None:
            logger.error("Image record has no storage locator", extra={"image_id": record.id})
            raise NotFoundError(
                message="Image file is unavailable",
                details={"image_id": record.id},
            )

        content, content_type, _ = self.storage.download_blob(locator=locator)

        logger.info("Image content fetched", extra={"image_id": record.id, "size": len(content)})
        return content, record.mimetype or content_type
