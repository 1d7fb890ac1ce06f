"""
Pydantic models for list images response.
"""

from pydantic import BaseModel, Field, StrictInt

from core.models.record import SanitizedImageRecord


class ListImagesResponse(BaseModel):
    """All stored images, oldest first, without storage locators."""

    images: list[SanitizedImageRecord] = Field(..., description="Sanitized image records")
    total_count: StrictInt = Field(..., description="Number of images returned")
