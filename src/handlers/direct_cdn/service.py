"""Business logic for token-gated direct CDN links."""

from aws_lambda_powertools import Logger

from core.dependencies import get_metadata_store, get_token_service
from core.models.errors import AccessDeniedError, NotFoundError
from core.models.record import ImageRecord
from core.repositories.metadata_repository import ImageMetadataRepository
from core.security.capability_tokens import CapabilityTokenService
from core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND

logger = Logger(UTC=True)


class DirectCdnService:
    """Resolves the storage URL of a record for holders of a valid token."""

    def __init__(
        self,
        metadata: ImageMetadataRepository | None = None,
        tokens: CapabilityTokenService | None = None,
    ) -> None:
        self.metadata = metadata or get_metadata_store()
        self.tokens = tokens or get_token_service()

    def resolve(self, image_id: str, token: str) -> ImageRecord:
        """
        Verify `token` for `image_id` and return the raw record.

        The token is checked before the store is read, so an invalid token
        says nothing about whether the record exists.

        Raises:
            AccessDeniedError: If the token does not verify for this id
            NotFoundError: If no record has this id
        """
        if not self.tokens.verify(token, image_id):
            logger.warning("Direct access token rejected", extra={"image_id": image_id})
            raise AccessDeniedError(
                message="Invalid or expired token",
                details={"image_id": image_id},
            )

        record = self.metadata.get_by_id(image_id, sanitize=False)
        if record is None:
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"image_id": image_id},
            )

        return record
