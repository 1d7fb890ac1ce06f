"""Abstract contract for image metadata persistence."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Literal, overload

from core.models.record import ImageRecord, ImageRecordCreate, SanitizedImageRecord

NewRecord = ImageRecordCreate | Mapping[str, Any]


class ImageMetadataRepository(ABC):
    """Contract for storing and retrieving image records.

    Implementations could be a JSON file, a database table, etc.
    Handlers depend on this interface, not the implementation.
    """

    @abstractmethod
    def append(self, record: NewRecord) -> str:
        """Persist a new record and return its generated id.

        Args:
            record: Validated record input, or a mapping that validates into one

        Returns:
            The new record id

        Raises:
            ValidationError: If the record input is invalid
            StoreUnavailableError: If the store cannot be written
        """

    @overload
    def get_all(self, *, sanitize: Literal[True] = ...) -> list[SanitizedImageRecord]: ...

    @overload
    def get_all(self, *, sanitize: Literal[False]) -> list[ImageRecord]: ...

    @abstractmethod
    def get_all(
        self, *, sanitize: bool = True
    ) -> list[SanitizedImageRecord] | list[ImageRecord]:
        """Return every record in insertion order.

        Raises:
            StoreUnavailableError: If the store cannot be read
        """

    @overload
    def get_by_id(
        self, record_id: str, *, sanitize: Literal[True] = ...
    ) -> SanitizedImageRecord | None: ...

    @overload
    def get_by_id(
        self, record_id: str, *, sanitize: Literal[False]
    ) -> ImageRecord | None: ...

    @abstractmethod
    def get_by_id(
        self, record_id: str, *, sanitize: bool = True
    ) -> SanitizedImageRecord | ImageRecord | None:
        """Look up a single record.

        Returns:
            The record, or None if no record has this id

        Raises:
            StoreUnavailableError: If the store cannot be read
        """

    @abstractmethod
    def delete_by_id(self, record_id: str) -> bool:
        """Remove a record.

        Does not touch the blob the record points to.

        Returns:
            True if a record was removed, False if none had this id

        Raises:
            StoreUnavailableError: If the store cannot be read or written
        """
