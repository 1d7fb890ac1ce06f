"""
Pytest configuration and fixtures for image-relay tests.
Provides AWS mocking, S3 and JSON metadata store fixtures with proper cleanup.
"""

import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "image-relay-test-bucket")
os.environ.setdefault("API_SECRET_KEY", "test-secret-key")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ImageRelayTests")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "image-relay")

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from core.dependencies import reset_dependencies
from core.infrastructure.adapters.json_file_adapter import JsonFileAdapter
from core.infrastructure.storage.json_metadata_store import JsonFileMetadataStore
from core.utils.constants import ENV_IMAGE_METADATA_FILE_PATH


@pytest.fixture(autouse=True)
def isolated_metadata_file(tmp_path, monkeypatch) -> Path:
    """Point every test at its own metadata file and rebuild shared collaborators."""
    path = tmp_path / "data" / "images.json"
    monkeypatch.setenv(ENV_IMAGE_METADATA_FILE_PATH, str(path))

    reset_dependencies()
    yield path
    reset_dependencies()


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture
def metadata_store(isolated_metadata_file) -> JsonFileMetadataStore:
    return JsonFileMetadataStore(JsonFileAdapter(isolated_metadata_file))


@pytest.fixture
def write_metadata_file(isolated_metadata_file) -> Callable[[Any], Path]:
    """
    Helper to write a raw document into the metadata file.

    Usage:
        write_metadata_file({"images": [record]})
    """

    def _write(document: Any) -> Path:
        isolated_metadata_file.parent.mkdir(parents=True, exist_ok=True)
        isolated_metadata_file.write_text(json.dumps(document, indent=2), encoding="utf-8")
        return isolated_metadata_file

    return _write


@pytest.fixture
def read_metadata_file(isolated_metadata_file) -> Callable[[], dict[str, Any]]:
    """Helper to load the metadata file as written by the store."""

    def _read() -> dict[str, Any]:
        return json.loads(isolated_metadata_file.read_text(encoding="utf-8"))

    return _read


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(Bucket=bucket_name, Delete={"Objects": delete_keys})
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")

    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError:
        s3_client.create_bucket(Bucket=bucket_name)

    yield s3_client

    _cleanup_s3_objects(s3_client, bucket_name)


@pytest.fixture
def s3_put_object(s3_client) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        response = s3_put_object("blobs/abc.jpg", image_bytes, "image/jpeg")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")
        return s3_client.put_object(Bucket=bucket_name, Key=key, Body=body, ContentType=content_type)

    return _put


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], bytes]:
    """
    Helper to get an object from S3.

    Usage:
        content = s3_get_object("blobs/abc.jpg")
    """

    def _get(key: str) -> bytes:
        bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")
        response: dict[str, Any] = s3_client.get_object(Bucket=bucket_name, Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_object_exists(s3_client) -> Callable[[str], bool]:
    def _exists(key: str) -> bool:
        try:
            s3_client.head_object(Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"), Key=key)
        except ClientError:
            return False
        return True

    return _exists


@pytest.fixture
def sample_record_input() -> dict[str, Any]:
    """Record input as handed to the metadata store."""
    return {
        "original_name": "cat.png",
        "mimetype": "image/png",
        "size": 1024,
        "is_document": True,
        "file_id": "blobs/abc123.png",
        "file_path": "s3://image-relay-test-bucket/blobs/abc123.png",
        "cdn_url": "https://storage.example.com/image-relay-test-bucket/blobs/abc123.png",
    }


@pytest.fixture
def stored_record_document() -> dict[str, Any]:
    """A record as persisted in the metadata file (camelCase keys)."""
    return {
        "id": "rec-1",
        "createdAt": "2024-01-15T10:00:00+00:00",
        "originalName": "photo.jpg",
        "mimetype": "image/jpeg",
        "size": 2048,
        "isDocument": True,
        "fileType": "image",
        "fileId": "blobs/rec1.jpg",
        "filePath": "s3://image-relay-test-bucket/blobs/rec1.jpg",
        "messageId": 42,
        "cdnUrl": "https://storage.example.com/image-relay-test-bucket/blobs/rec1.jpg",
    }


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    import base64

    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (minimal valid JPEG)."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\x14\r\x0c\x0b\x0b\x0c\x19\x12\x13\x0f\x14\x1d\x1a\x1f\x1e\x1d\x1a\x1c"
        b"\x1c $.' \",#\x1c\x1c(7),01444\x1f'9=82<.342\xff\xc0\x00\x0b\x08"
        b"\x00\x01\x00\x01\x01\x01\x11\x00\xff\xc4\x00\x14\x00\x01\x00\x00\x00"
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\t\xff\xc4\x00\x14\x10"
        b"\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )
