"""Pydantic models for access token request/response."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class IssueTokenRequest(BaseModel):
    """Validation model for token issue request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Image ID the token will grant access to",
    )


class IssueTokenResponse(BaseModel):
    """Response model for an issued access token."""

    success: bool = True
    image_id: str = Field(..., description="Image ID the token is scoped to")
    token: str = Field(..., description="Capability token")
    expires_at: StrictInt = Field(..., description="Expiry as epoch seconds")
