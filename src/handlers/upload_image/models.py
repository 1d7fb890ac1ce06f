"""Pydantic models for image upload request/response."""

import base64

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from core.utils.constants import MAX_FILE_SIZE, get_max_file_size_mb

logger = Logger(UTC=True)


class ImageUploadRequest(BaseModel):
    """Validation model for image upload request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file: StrictStr = Field(..., description="Base64 encoded file")
    original_name: StrictStr = Field(
        ..., min_length=1, max_length=255, description="Original file name"
    )

    @field_validator("original_name")
    @classmethod
    def validate_original_name(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("File name must not contain path separators")
        return value

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """
        Validate base64 file:
        - must not be empty
        - must decode correctly
        - must have non-zero size
        - must not exceed MAX_FILE_SIZE
        """
        if not value:
            raise ValueError("file must not be empty")

        try:
            file_data = base64.b64decode(value, validate=True)
        except Exception as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        if not file_data:
            logger.error("File validation error: Decoded file is empty")
            raise ValueError("Decoded file is empty")

        if len(file_data) > MAX_FILE_SIZE:
            logger.error("File size validation error: File size exceeds limit")
            raise ValueError(f"File size exceeds the {get_max_file_size_mb()}MB limit")

        return value


class ImageUploadResponse(BaseModel):
    """Response model for successful image upload."""

    success: bool = Field(True, description="Upload outcome")
    message: str = Field(..., description="Success message")
    image_id: str = Field(..., description="Unique image ID")
    cdn_url: str = Field(..., description="Relative URL serving the file")
