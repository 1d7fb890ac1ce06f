"""Custom exception classes for the image relay service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_BLOB_DELETION_FAILED,
    ERROR_CODE_BLOB_DOWNLOAD_FAILED,
    ERROR_CODE_BLOB_STORAGE,
    ERROR_CODE_BLOB_UPLOAD_FAILED,
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORE_UNAVAILABLE,
    ERROR_CODE_TOKEN_INVALID,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """
    Base exception for all image service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImageServiceError):
    """Raised when request or record validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotFoundError(ImageServiceError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StoreUnavailableError(ImageServiceError):
    """Raised when the metadata store cannot be read or written.

    Distinct from a missing record: callers surface it as a server-side
    failure, never as "not found".
    """

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORE_UNAVAILABLE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConfigurationError(ImageServiceError):
    """Raised when required process configuration is missing or invalid."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class BlobStorageError(ImageServiceError):
    """Raised when a blob storage operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_BLOB_STORAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class BlobUploadFailedError(BlobStorageError):
    """Raised when relaying a file to blob storage fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_BLOB_UPLOAD_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class BlobDownloadFailedError(BlobStorageError):
    """Raised when fetching a file from blob storage fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_BLOB_DOWNLOAD_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class BlobDeletionFailedError(BlobStorageError):
    """Raised when removing a file from blob storage fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_BLOB_DELETION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MIMETypeError(ValidationError):
    """Raised when an unsupported MIME type is provided."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UNSUPPORTED_MIME_TYPE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class FileSizeError(ValidationError):
    """Raised when file size exceeds the allowed limit."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_FILE_SIZE_EXCEEDED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class AccessDeniedError(ImageServiceError):
    """Raised when an access token does not grant access to a record."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_TOKEN_INVALID,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
