"""Business logic for issuing direct-access tokens."""

from aws_lambda_powertools import Logger

from core.dependencies import get_metadata_store, get_token_service
from core.models.errors import NotFoundError
from core.models.token import IssuedToken
from core.repositories.metadata_repository import ImageMetadataRepository
from core.security.capability_tokens import CapabilityTokenService
from core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND

logger = Logger(UTC=True)


class TokenService:
    """Issues tokens only for records that exist."""

    def __init__(
        self,
        metadata: ImageMetadataRepository | None = None,
        tokens: CapabilityTokenService | None = None,
    ) -> None:
        self.metadata = metadata or get_metadata_store()
        self.tokens = tokens or get_token_service()

    def issue_for(self, image_id: str) -> IssuedToken:
        """
        Issue a token for an existing record.

        Raises:
            NotFoundError: If no record has this id
            StoreUnavailableError: If the metadata store cannot be read
        """
        if self.metadata.get_by_id(image_id) is None:
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"image_id": image_id},
            )

        issued = self.tokens.issue(image_id)

        logger.info(
            "Direct access token issued",
            extra={"image_id": image_id, "expires_at": issued.expires_at},
        )
        return issued
