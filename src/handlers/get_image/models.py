from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
)


class GetImageRequest(BaseModel):
    """Validation model for CDN image request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Image ID to serve",
    )

    size: Literal["small", "medium", "original"] | None = Field(
        default=None,
        description=(
            "Requested variant. Only part of the cache key; "
            "every variant serves the original file."
        ),
    )

    @field_validator("image_id")
    @classmethod
    def validate_image_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("image_id must not be blank")
        return value
