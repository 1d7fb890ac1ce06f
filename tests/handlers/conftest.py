import base64
import json
from types import SimpleNamespace
from typing import Any

import pytest

from core.security.capability_tokens import CapabilityTokenService


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def stored_record(write_metadata_file, stored_record_document) -> dict[str, Any]:
    """Metadata file holding a single record."""
    write_metadata_file({"images": [stored_record_document]})
    return stored_record_document


@pytest.fixture
def token_service() -> CapabilityTokenService:
    return CapabilityTokenService.from_env()


@pytest.fixture
def cdn_event() -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": "/cdn/rec-1",
        "pathParameters": {"image_id": "rec-1"},
        "queryStringParameters": None,
        "headers": {},
    }


@pytest.fixture
def list_images_event() -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": "/images",
        "headers": {"x-api-key": "test-api-key"},
    }


@pytest.fixture
def delete_image_event() -> dict[str, Any]:
    return {
        "httpMethod": "DELETE",
        "path": "/images/rec-1",
        "pathParameters": {"image_id": "rec-1"},
        "headers": {"x-api-key": "test-api-key"},
    }


@pytest.fixture
def issue_token_event() -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": "/direct-cdn/rec-1/token",
        "pathParameters": {"image_id": "rec-1"},
        "headers": {"x-api-key": "test-api-key"},
    }


@pytest.fixture
def direct_cdn_event() -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": "/direct-cdn/rec-1",
        "pathParameters": {"image_id": "rec-1"},
        "queryStringParameters": None,
        "headers": {},
    }


@pytest.fixture
def upload_image_event(sample_image_binary) -> dict[str, Any]:
    return {
        "httpMethod": "POST",
        "path": "/images",
        "body": json.dumps(
            {
                "file": base64.b64encode(sample_image_binary).decode("utf-8"),
                "original_name": "test_upload.png",
            }
        ),
        "headers": {
            "Content-Type": "application/json",
            "x-api-key": "test-api-key",
        },
    }
