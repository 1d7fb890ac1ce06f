"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_INVALID_RECORD = "INVALID_RECORD"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"

# Access Errors
ERROR_CODE_TOKEN_REQUIRED = "TOKEN_REQUIRED"
ERROR_CODE_TOKEN_INVALID = "TOKEN_INVALID"

# Blob Storage Errors
ERROR_CODE_BLOB_STORAGE = "BLOB_STORAGE_ERROR"
ERROR_CODE_BLOB_UPLOAD_FAILED = "BLOB_UPLOAD_FAILED"
ERROR_CODE_BLOB_DOWNLOAD_FAILED = "BLOB_DOWNLOAD_FAILED"
ERROR_CODE_BLOB_DELETION_FAILED = "BLOB_DELETION_FAILED"

# Metadata Store Errors
ERROR_CODE_STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
ERROR_CODE_METADATA_READ_FAILED = "METADATA_READ_FAILED"
ERROR_CODE_METADATA_WRITE_FAILED = "METADATA_WRITE_FAILED"
ERROR_CODE_METADATA_CORRUPTED = "METADATA_CORRUPTED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"

# Configuration
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"

# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB in bytes

MIME_TYPE_EXTENSION_MAP: Final[dict[str, str]] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
    "image/svg+xml": "svg",
    "application/pdf": "pdf",
}

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_EXTENSION_MAP.keys())

DOCUMENT_MIME_TYPES: Final[frozenset[str]] = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/rtf",
        "application/vnd.ms-excel",
        "application/vnd.ms-powerpoint",
        "application/vnd.oasis.opendocument.text",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    }
)

FILE_TYPE_IMAGE = "image"
FILE_TYPE_VIDEO = "video"
FILE_TYPE_AUDIO = "audio"
FILE_TYPE_DOCUMENT = "document"
FILE_TYPE_OTHER = "other"

BLOB_KEY_PREFIX = "blobs"
FALLBACK_MIME_TYPE = "application/octet-stream"
BLOB_NAME_METADATA_KEY = "original-name"

# ============================================================================
# Metadata Store
# ============================================================================

DEFAULT_METADATA_FILE_PATH = "data/images.json"
METADATA_COLLECTION_KEY = "images"

# ============================================================================
# Capability Tokens
# ============================================================================

TOKEN_SEPARATOR = ":"
TOKEN_EXPIRY_MAX_DIGITS = 20
DEFAULT_TOKEN_TTL_SECONDS = 3600  # 1 hour

# ============================================================================
# CDN Caching
# ============================================================================

CDN_CACHE_MAX_AGE_SECONDS = 31536000  # 1 year
CDN_DEFAULT_SIZE = "original"
DIRECT_CDN_NOTE = (
    "This URL contains sensitive information. "
    "Do not share and use only for direct image embedding."
)

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key,If-None-Match"
EXPOSE_HEADERS = "Content-Type,Content-Length,ETag,Last-Modified,Cache-Control"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_METADATA_FILE_PATH = "IMAGE_METADATA_FILE_PATH"
ENV_API_SECRET_KEY = "API_SECRET_KEY"
ENV_TOKEN_EXPIRY = "TOKEN_EXPIRY"
ENV_APP_RUNTIME = "APP_RUNTIME"
LOCALSTACK_URL = "http://localstack"
LOCALHOST_URL = "http://localhost"

# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)
