from unittest.mock import MagicMock

import pytest

from core.models.errors import StoreUnavailableError
from handlers.list_images.service import ListService


class TestListService:
    def test_requests_sanitized_records(self) -> None:
        metadata = MagicMock()
        metadata.get_all.return_value = []

        assert ListService(metadata=metadata).list_images() == []
        metadata.get_all.assert_called_once_with(sanitize=True)

    def test_uses_shared_store(self, metadata_store, sample_record_input) -> None:
        record_id = metadata_store.append(sample_record_input)

        images = ListService().list_images()

        assert [image.id for image in images] == [record_id]

    def test_store_failure_propagates(self) -> None:
        metadata = MagicMock()
        metadata.get_all.side_effect = StoreUnavailableError(message="Unable to read image metadata")

        with pytest.raises(StoreUnavailableError):
            ListService(metadata=metadata).list_images()
