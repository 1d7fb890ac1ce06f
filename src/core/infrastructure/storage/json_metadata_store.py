"""JSON-file-backed implementation of ImageMetadataRepository."""

import threading
import uuid
from collections.abc import Mapping

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.json_file_adapter import (
    JsonFileAdapter,
    JsonFileAdapterProtocol,
)
from core.models.errors import StoreUnavailableError, ValidationError
from core.models.record import (
    ImageCollection,
    ImageRecord,
    ImageRecordCreate,
    SanitizedImageRecord,
)
from core.repositories.metadata_repository import ImageMetadataRepository, NewRecord
from core.utils.constants import (
    ERROR_CODE_INVALID_RECORD,
    ERROR_CODE_METADATA_CORRUPTED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_READ_FAILED,
    ERROR_CODE_METADATA_WRITE_FAILED,
)
from core.utils.mime import classify_file_type
from core.utils.time import utc_now_iso
from core.utils.validators import sanitize_validation_errors

logger = Logger(UTC=True)


class JsonFileMetadataStore(ImageMetadataRepository):
    """Metadata store keeping the whole collection in one JSON file.

    Every mutation is a read-modify-write of the full collection, serialized
    behind a single lock. Snapshots are swapped in atomically by the adapter,
    so reads run without the lock and never see a partial write.

    File and JSON errors are translated into StoreUnavailableError.
    """

    def __init__(self, adapter: JsonFileAdapterProtocol | None = None) -> None:
        """Initialize with a JSON file adapter."""
        self._file: JsonFileAdapterProtocol = adapter or JsonFileAdapter()
        self._lock = threading.RLock()

    @staticmethod
    def generate_record_id() -> str:
        """Generate a unique record identifier."""
        return str(uuid.uuid4())

    def append(self, record: NewRecord) -> str:
        """Validate, stamp and persist a new record.

        Raises:
            ValidationError: If the record input is invalid
            StoreUnavailableError: If the store cannot be read or written
        """
        new_record = self._validate_new_record(record)

        with self._lock:
            collection = self._load(error_code=ERROR_CODE_METADATA_READ_FAILED)

            taken = {existing.id for existing in collection.images}
            record_id = self.generate_record_id()
            while record_id in taken:
                record_id = self.generate_record_id()

            stored = ImageRecord(
                id=record_id,
                created_at=utc_now_iso(),
                file_type=classify_file_type(new_record.mimetype),
                **new_record.model_dump(),
            )
            collection.images.append(stored)

            self._save(
                collection,
                error_code=ERROR_CODE_METADATA_WRITE_FAILED,
                record_id=record_id,
            )

        logger.info(
            "Record appended",
            extra={"record_id": record_id, "file_type": stored.file_type},
        )
        return record_id

    def get_all(
        self, *, sanitize: bool = True
    ) -> list[SanitizedImageRecord] | list[ImageRecord]:
        collection = self._load(error_code=ERROR_CODE_METADATA_READ_FAILED)

        if sanitize:
            return [record.sanitized() for record in collection.images]
        return list(collection.images)

    def get_by_id(
        self, record_id: str, *, sanitize: bool = True
    ) -> SanitizedImageRecord | ImageRecord | None:
        logger.debug("Fetching record", extra={"record_id": record_id})

        collection = self._load(error_code=ERROR_CODE_METADATA_READ_FAILED)

        for record in collection.images:
            if record.id == record_id:
                return record.sanitized() if sanitize else record

        return None

    def delete_by_id(self, record_id: str) -> bool:
        """Remove a record if present.

        An absent id leaves the file untouched.
        """
        logger.debug("Removing record", extra={"record_id": record_id})

        with self._lock:
            collection = self._load(error_code=ERROR_CODE_METADATA_DELETE_FAILED)

            remaining = [record for record in collection.images if record.id != record_id]
            if len(remaining) == len(collection.images):
                logger.info("Record not present, nothing removed", extra={"record_id": record_id})
                return False

            collection.images = remaining
            self._save(
                collection,
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                record_id=record_id,
            )

        logger.info("Record removed", extra={"record_id": record_id})
        return True

    @staticmethod
    def _validate_new_record(record: NewRecord) -> ImageRecordCreate:
        if isinstance(record, ImageRecordCreate):
            return record

        try:
            return ImageRecordCreate.model_validate(
                dict(record) if isinstance(record, Mapping) else record
            )
        except PydanticValidationError as exc:
            logger.warning("Rejected invalid record", extra={"errors": exc.error_count()})
            raise ValidationError(
                message="Invalid image record",
                error_code=ERROR_CODE_INVALID_RECORD,
                details={"errors": sanitize_validation_errors(exc.errors())},
            ) from exc

    def _load(self, *, error_code: str) -> ImageCollection:
        try:
            document = self._file.read_document()
            return ImageCollection.model_validate(document)

        except PydanticValidationError as exc:
            logger.error("Metadata file failed validation", extra={"errors": exc.error_count()})
            raise StoreUnavailableError(
                message="Image metadata is corrupted",
                error_code=ERROR_CODE_METADATA_CORRUPTED,
            ) from exc

        except (OSError, ValueError) as exc:
            logger.error("Metadata file read failed", extra={"error": str(exc)})
            raise StoreUnavailableError(
                message="Unable to read image metadata",
                error_code=error_code,
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error reading metadata")
            raise StoreUnavailableError(
                message="Unable to read image metadata",
                error_code=error_code,
            ) from exc

    def _save(self, collection: ImageCollection, *, error_code: str, record_id: str) -> None:
        try:
            self._file.write_document(collection.to_document())

        except (OSError, TypeError, ValueError) as exc:
            logger.error(
                "Metadata file write failed",
                extra={"record_id": record_id, "error": str(exc)},
            )
            raise StoreUnavailableError(
                message="Unable to save image metadata at this time",
                error_code=error_code,
                details={"record_id": record_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error writing metadata")
            raise StoreUnavailableError(
                message="Unable to save image metadata at this time",
                error_code=error_code,
                details={"record_id": record_id},
            ) from exc
