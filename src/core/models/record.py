"""Image record models.

Three shapes of the same record exist:

- ``ImageRecordCreate``: the validated input accepted by the metadata store.
- ``ImageRecord``: the persisted form, including the blob locator fields.
- ``SanitizedImageRecord``: the projection handed to untrusted callers.

The sanitized view is built from ``SANITIZED_FIELDS`` only; a field that is
not listed there never leaves the service through it.
"""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_camel

from core.utils.constants import FALLBACK_MIME_TYPE, METADATA_COLLECTION_KEY
from core.utils.mime import classify_file_type

SANITIZED_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "created_at",
        "original_name",
        "mimetype",
        "size",
        "is_document",
        "file_type",
    }
)


class BlobLocator(BaseModel):
    """Handles needed to fetch or delete a blob from external storage."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    file_id: StrictStr = Field(..., min_length=1, description="Storage key of the blob")
    file_path: StrictStr | None = Field(None, description="Provider-specific blob path")
    message_id: StrictInt | None = Field(None, description="Upstream message carrying the blob")
    cdn_url: StrictStr | None = Field(None, description="Direct URL of the blob")


class ImageRecordCreate(BaseModel):
    """Validated input for a new record.

    Unknown fields are rejected rather than persisted.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    original_name: StrictStr = Field(..., min_length=1, max_length=255)
    mimetype: StrictStr = Field(..., min_length=3, max_length=255)
    size: StrictInt = Field(..., ge=0, description="File size in bytes")
    is_document: StrictBool = Field(False, description="Stored as a document upstream")

    file_id: StrictStr = Field(..., min_length=1)
    file_path: StrictStr | None = None
    message_id: StrictInt | None = None
    cdn_url: StrictStr | None = None

    @classmethod
    def from_locator(
        cls,
        *,
        locator: BlobLocator,
        original_name: str,
        mimetype: str,
        size: int,
        is_document: bool = False,
    ) -> "ImageRecordCreate":
        return cls(
            original_name=original_name,
            mimetype=mimetype,
            size=size,
            is_document=is_document,
            **locator.model_dump(),
        )


class SanitizedImageRecord(BaseModel):
    """Record projection without any storage locator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: StrictStr
    created_at: StrictStr
    original_name: StrictStr
    mimetype: StrictStr
    size: StrictInt
    is_document: StrictBool
    file_type: StrictStr


class ImageRecord(BaseModel):
    """Persisted record.

    Serialized with camelCase keys. Fields this version does not know are
    kept so that rewriting the collection does not drop them. Descriptive
    fields missing from older records load with defaults; only the id is
    mandatory.
    """

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: StrictStr = Field(..., min_length=1)
    created_at: StrictStr = ""
    original_name: StrictStr = ""
    mimetype: StrictStr = FALLBACK_MIME_TYPE
    size: StrictInt = 0
    is_document: StrictBool = False
    file_type: StrictStr

    file_id: StrictStr | None = None
    file_path: StrictStr | None = None
    message_id: StrictInt | None = None
    cdn_url: StrictStr | None = None

    @model_validator(mode="before")
    @classmethod
    def derive_missing_file_type(cls, data: Any) -> Any:
        # Records written before file types existed
        if isinstance(data, dict) and "fileType" not in data and "file_type" not in data:
            mimetype = data.get("mimetype")
            if not isinstance(mimetype, str):
                mimetype = FALLBACK_MIME_TYPE
            return {**data, "fileType": classify_file_type(mimetype)}
        return data

    def sanitized(self) -> SanitizedImageRecord:
        return SanitizedImageRecord.model_validate(self.model_dump(include=set(SANITIZED_FIELDS)))

    def locator(self) -> BlobLocator | None:
        """Blob locator of this record, or None when the record has no storage key."""
        if not self.file_id:
            return None

        return BlobLocator(
            file_id=self.file_id,
            file_path=self.file_path,
            message_id=self.message_id,
            cdn_url=self.cdn_url,
        )

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class ImageCollection(BaseModel):
    """Top-level document of the metadata file."""

    model_config = ConfigDict(extra="allow")

    images: list[ImageRecord] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        document = self.model_dump(mode="json", exclude={METADATA_COLLECTION_KEY})
        document[METADATA_COLLECTION_KEY] = [record.to_document() for record in self.images]
        return document
