"""Capability token model."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class IssuedToken(BaseModel):
    """A freshly issued capability token and its expiry."""

    model_config = ConfigDict(frozen=True)

    token: StrictStr = Field(..., description="<record_id>:<expires_at>:<hex signature>")
    expires_at: StrictInt = Field(..., description="Expiry as epoch seconds")
