"""Thin adapter for the S3 bucket that holds relayed blobs."""

import os
from typing import Any, Protocol
from urllib.parse import quote

import boto3

from core.utils.constants import (
    BLOB_NAME_METADATA_KEY,
    ENV_APP_RUNTIME,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_S3_BUCKET_NAME,
    LOCALHOST_URL,
    LOCALSTACK_URL,
)


class S3AdapterProtocol(Protocol):
    """Object operations S3BlobStorage builds blob locators from."""

    def write_object(self, *, key: str, body: bytes, content_type: str, original_name: str) -> None: ...

    def read_object(self, *, key: str) -> tuple[bytes, str | None, int | None]: ...

    def delete_object(self, *, key: str) -> None: ...

    def object_uri(self, key: str) -> str: ...

    def direct_url(self, key: str) -> str: ...


class S3Adapter:
    """Object I/O on a single bucket.

    boto3 errors are not caught here; S3BlobStorage translates them into
    blob storage errors.
    """

    def __init__(self, bucket_name: str | None = None, *, client: Any = None) -> None:
        self.bucket = bucket_name or os.getenv(ENV_IMAGE_S3_BUCKET_NAME)
        if not self.bucket:
            raise RuntimeError(f"{ENV_IMAGE_S3_BUCKET_NAME} environment variable is not set")

        self._client = client or boto3.client(
            "s3",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )

    def write_object(self, *, key: str, body: bytes, content_type: str, original_name: str) -> None:
        # User metadata travels as x-amz-meta-* headers: ASCII only, no underscores
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            Metadata={BLOB_NAME_METADATA_KEY: quote(original_name)},
        )

    def read_object(self, *, key: str) -> tuple[bytes, str | None, int | None]:
        """Return the object's bytes with the stored content type and length."""
        response = self._client.get_object(Bucket=self.bucket, Key=key)
        return response["Body"].read(), response.get("ContentType"), response.get("ContentLength")

    def delete_object(self, *, key: str) -> None:
        self._client.delete_object(Bucket=self.bucket, Key=key)

    def object_uri(self, key: str) -> str:
        return f"s3://{self.bucket}/{key}"

    def direct_url(self, key: str) -> str:
        """Path-style URL of the object as seen from outside the deployment.

        Under LocalStack the endpoint host only resolves inside the docker
        network, so it is swapped for localhost.
        """
        endpoint = str(self._client.meta.endpoint_url).rstrip("/")
        url = f"{endpoint}/{self.bucket}/{key}"

        if os.getenv(ENV_APP_RUNTIME) == "localstack":
            url = url.replace(LOCALSTACK_URL, LOCALHOST_URL, 1)
        return url
