"""Pydantic models for delete image request/response."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class DeleteImageRequest(BaseModel):
    """Validation model for delete image request."""

    model_config = ConfigDict(str_strip_whitespace=True)
    image_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Image ID to delete",
    )


class DeleteImageResponse(BaseModel):
    """Response model for successful image deletion."""

    success: bool = True
    message: str = Field(..., description="Success message")
    image_id: str = Field(..., description="Deleted image ID")
    blob_deleted: bool = Field(..., description="Whether the stored file was removed")
    deleted_at: str = Field(..., description="Deletion timestamp")
