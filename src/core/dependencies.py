"""Process-wide collaborators shared by the Lambda handlers.

Each provider builds its object once per process (one Lambda container)
and hands the same instance to every invocation. Services receive these
instances through their constructors.
"""

from functools import lru_cache

from core.infrastructure.aws.s3_blob_storage import S3BlobStorage
from core.infrastructure.storage.json_metadata_store import JsonFileMetadataStore
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import BlobStorageRepository
from core.security.capability_tokens import CapabilityTokenService


@lru_cache(maxsize=1)
def get_metadata_store() -> ImageMetadataRepository:
    return JsonFileMetadataStore()


@lru_cache(maxsize=1)
def get_blob_storage() -> BlobStorageRepository:
    return S3BlobStorage()


@lru_cache(maxsize=1)
def get_token_service() -> CapabilityTokenService:
    """Token service configured from the environment.

    Raises:
        ConfigurationError: If API_SECRET_KEY is missing
    """
    return CapabilityTokenService.from_env()


def reset_dependencies() -> None:
    """Drop cached instances so the next call rebuilds them from the environment."""
    get_metadata_store.cache_clear()
    get_blob_storage.cache_clear()
    get_token_service.cache_clear()
