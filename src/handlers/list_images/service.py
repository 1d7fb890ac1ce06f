"""
Business logic for image listing.
"""

from aws_lambda_powertools import Logger

from core.dependencies import get_metadata_store
from core.models.record import SanitizedImageRecord
from core.repositories.metadata_repository import ImageMetadataRepository

logger = Logger(UTC=True)


class ListService:
    """Application service responsible for listing stored images."""

    def __init__(self, metadata: ImageMetadataRepository | None = None) -> None:
        """Initialize list service with required dependencies."""
        self.metadata = metadata or get_metadata_store()

    def list_images(self) -> list[SanitizedImageRecord]:
        """Return every record in insertion order, sanitized.

        Raises:
            StoreUnavailableError: If the metadata store cannot be read
        """
        images = self.metadata.get_all(sanitize=True)

        logger.info("Images listed successfully", extra={"count": len(images)})
        return images
