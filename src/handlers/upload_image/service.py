"""Business logic for file upload operations.

This module relays an uploaded file to blob storage and records its
metadata, translating failures into domain-specific errors.
"""

import base64

from aws_lambda_powertools import Logger

from core.dependencies import get_blob_storage, get_metadata_store
from core.models.errors import FileSizeError, MIMETypeError, ValidationError
from core.models.record import ImageRecordCreate
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import BlobStorageRepository
from core.utils.constants import ALLOWED_MIME_TYPES, MAX_FILE_SIZE, get_max_file_size_mb
from core.utils.mime import detect_mime_type

logger = Logger(UTC=True)


class UploadService:
    """Application service responsible for file uploads.

    This service orchestrates:
    - File decoding and validation
    - Relaying file content to blob storage
    - Appending the record to the metadata store
    """

    def __init__(
        self,
        metadata: ImageMetadataRepository | None = None,
        storage: BlobStorageRepository | None = None,
    ) -> None:
        """Initialize the upload service with its collaborators."""
        self.metadata = metadata or get_metadata_store()
        self.storage = storage or get_blob_storage()

    @staticmethod
    def decode_file(encoded: str) -> bytes:
        """Decode base64-encoded file data.

        Raises:
            ValidationError: If decoding fails
        """
        try:
            return base64.b64decode(encoded, validate=True)
        except Exception as exc:
            logger.exception("Failed to decode base64 file data")
            raise ValidationError(
                message="Invalid file data",
                details={"encoding": "base64"},
            ) from exc

    def upload_file(self, *, original_name: str, file_data: bytes) -> str:
        """Store a file and record its metadata.

        The upload flow is:
        1. Detect and validate the MIME type and size
        2. Relay the file to blob storage
        3. Append the record to the metadata store
        4. Remove the blob again if the append fails

        Returns:
            The new record id

        Raises:
            MIMETypeError: If the file type is not supported
            FileSizeError: If the file is too large
            BlobUploadFailedError: If storage upload fails
            StoreUnavailableError: If the metadata store cannot be written
        """
        logger.debug("Starting file upload", extra={"size": len(file_data)})

        # Step 1: Validate content
        try:
            mime_type = detect_mime_type(file_data)
        except ValueError as exc:
            raise MIMETypeError(
                message="Unsupported file type. Allowed: JPEG, PNG, GIF, WebP, BMP, TIFF, PDF, SVG",
            ) from exc

        if mime_type not in ALLOWED_MIME_TYPES:
            logger.warning("Unsupported MIME type", extra={"mime_type": mime_type})
            raise MIMETypeError(
                message="Unsupported file type",
                details={"mime_type": mime_type},
            )

        if len(file_data) > MAX_FILE_SIZE:
            raise FileSizeError(
                message=f"File size exceeds the {get_max_file_size_mb()}MB limit",
                details={"size": len(file_data), "max_size": MAX_FILE_SIZE},
            )

        # Step 2: Relay to blob storage
        locator = self.storage.upload_blob(
            blob_name=original_name,
            file_data=file_data,
            mime_type=mime_type,
        )

        # Step 3: Record metadata (rollback storage on failure)
        record = ImageRecordCreate.from_locator(
            locator=locator,
            original_name=original_name,
            mimetype=mime_type,
            size=len(file_data),
            is_document=True,
        )

        try:
            record_id = self.metadata.append(record)
        except Exception:
            logger.exception("Failed to persist file metadata")

            # Best-effort cleanup to avoid orphaned blobs
            try:
                self.storage.remove_blob(locator=locator)
            except Exception:
                logger.warning(
                    "Failed to clean up uploaded blob after metadata failure",
                    extra={"file_id": locator.file_id},
                )
            raise

        logger.info(
            "File uploaded successfully",
            extra={"record_id": record_id, "mime_type": mime_type},
        )
        return record_id
