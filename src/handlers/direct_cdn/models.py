"""Pydantic models for direct CDN link request/response."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.utils.constants import DIRECT_CDN_NOTE


class DirectCdnRequest(BaseModel):
    """Validation model for direct CDN link request.

    The token stays optional here so a missing token can be answered with
    401 rather than a generic validation error.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: StrictStr = Field(..., min_length=1, description="Image ID")
    token: StrictStr | None = Field(default=None, description="Capability token")


class DirectCdnResponse(BaseModel):
    """Response model exposing the storage-side URL of a file."""

    success: bool = True
    image_id: str
    original_name: str | None = None
    direct_cdn_url: str | None = Field(
        default=None,
        description="URL served by blob storage; carries storage credentials",
    )
    note: str = DIRECT_CDN_NOTE
