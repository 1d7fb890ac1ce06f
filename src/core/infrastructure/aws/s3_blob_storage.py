"""S3-backed implementation of BlobStorageRepository."""

import uuid

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    BlobDeletionFailedError,
    BlobDownloadFailedError,
    BlobUploadFailedError,
    NotFoundError,
)
from core.models.record import BlobLocator
from core.repositories.storage_repository import BlobStorageRepository
from core.utils.constants import (
    BLOB_KEY_PREFIX,
    FALLBACK_MIME_TYPE,
    MIME_TYPE_EXTENSION_MAP,
)

logger = Logger(UTC=True)


class S3BlobStorage(BlobStorageRepository):
    """Blob storage implementation backed by Amazon S3."""

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def upload_blob(
        self,
        *,
        blob_name: str,
        file_data: bytes,
        mime_type: str,
    ) -> BlobLocator:
        """Upload file bytes to S3 and return their locator."""
        key = f"{BLOB_KEY_PREFIX}/{uuid.uuid4().hex}.{self._get_extension(mime_type)}"

        logger.debug(
            "Uploading blob",
            extra={"key": key, "size": len(file_data), "mime_type": mime_type},
        )

        try:
            self._s3.write_object(
                key=key,
                body=file_data,
                content_type=mime_type,
                original_name=blob_name,
            )
            logger.info("Blob uploaded successfully", extra={"key": key})

        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise BlobUploadFailedError(
                message="Unable to upload file at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading blob")
            raise BlobUploadFailedError(
                message="Unable to upload file at this time",
                details={"key": key},
            ) from exc

        return BlobLocator(
            file_id=key,
            file_path=self._s3.object_uri(key),
            cdn_url=self._s3.direct_url(key),
        )

    def download_blob(self, *, locator: BlobLocator) -> tuple[bytes, str, int]:
        """Download blob bytes from S3."""
        key = locator.file_id
        logger.debug("Downloading blob", extra={"key": key})

        try:
            body, content_type, content_length = self._s3.read_object(key=key)
            content_type = content_type or FALLBACK_MIME_TYPE
            if content_length is None:
                content_length = len(body)

            logger.info(
                "Blob downloaded successfully",
                extra={"key": key, "size": content_length},
            )

            return body, content_type, content_length

        except ClientError as exc:
            logger.error("S3 download failed", extra={"key": key})

            if exc.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                raise NotFoundError(
                    message="File not found in storage",
                    details={"key": key},
                ) from exc

            raise BlobDownloadFailedError(
                message="Unable to download file at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error downloading blob")
            raise BlobDownloadFailedError(
                message="Unable to download file at this time",
                details={"key": key},
            ) from exc

    def remove_blob(self, *, locator: BlobLocator) -> None:
        """Delete a blob from S3."""
        key = locator.file_id
        logger.debug("Deleting blob", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
            logger.info("Blob deleted successfully", extra={"key": key})

        except ClientError as exc:
            logger.error("S3 deletion failed", extra={"key": key})
            raise BlobDeletionFailedError(
                message="Unable to delete file at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting blob")
            raise BlobDeletionFailedError(
                message="Unable to delete file at this time",
                details={"key": key},
            ) from exc

    @staticmethod
    def _get_extension(mime_type: str) -> str:
        """Return file extension for a given MIME type."""
        return MIME_TYPE_EXTENSION_MAP.get(mime_type, "bin")
