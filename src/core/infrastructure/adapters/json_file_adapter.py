"""Thin adapter for a JSON document kept in a single local file."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from core.utils.constants import (
    DEFAULT_METADATA_FILE_PATH,
    ENV_IMAGE_METADATA_FILE_PATH,
    METADATA_COLLECTION_KEY,
)


class JsonFileAdapterProtocol(Protocol):
    """Minimal JSON document adapter protocol (repository-facing)."""

    def read_document(self) -> dict[str, Any]: ...
    def write_document(self, document: dict[str, Any]) -> None: ...


class JsonFileAdapter:
    """Low-level JSON file operations (mechanical, no error handling).

    This adapter:
    - Reads and writes the whole document at once
    - Replaces the file atomically on write (temp file + rename)
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        """Use the given path, falling back to the environment and then the default."""
        self.path = Path(
            path or os.getenv(ENV_IMAGE_METADATA_FILE_PATH) or DEFAULT_METADATA_FILE_PATH
        )

    def read_document(self) -> dict[str, Any]:
        """Load the document; a missing file reads as an empty collection.

        Raises OSError / JSONDecodeError - caught by domain implementation.
        """
        if not self.path.exists():
            return {METADATA_COLLECTION_KEY: []}

        with self.path.open(encoding="utf-8") as fh:
            document = json.load(fh)

        if not isinstance(document, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")

        return document

    def write_document(self, document: dict[str, Any]) -> None:
        """Replace the file with a complete new snapshot.

        Readers see either the previous snapshot or this one, never a mix.
        Raises OSError / TypeError - caught by domain implementation.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
