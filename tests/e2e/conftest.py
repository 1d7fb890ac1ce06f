"""
Fixtures for end-to-end tests against a deployed stack on LocalStack.

Run with:
    pytest -m e2e tests/e2e
"""

import base64
import logging

import boto3
import pytest
import requests

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

ENDPOINT_BASE_URL = "http://localhost:4566"
REQUEST_TIMEOUT_SECONDS = 30


class E2EAPIClient:
    """Wrapper for making HTTP requests to the API"""

    def __init__(self, endpoint, headers):
        self.endpoint = endpoint
        self.headers = headers

    def _headers(self, headers=None):
        h = self.headers.copy()
        if headers:
            h.update(headers)
        return h

    def post(self, path, data, headers=None):
        """Make POST request"""
        return requests.post(
            f"{self.endpoint}{path}",
            json=data,
            headers=self._headers(headers),
            timeout=REQUEST_TIMEOUT_SECONDS,
        )

    def get(self, path, params=None, headers=None):
        """Make GET request"""
        return requests.get(
            f"{self.endpoint}{path}",
            params=params,
            headers=self._headers(headers),
            timeout=REQUEST_TIMEOUT_SECONDS,
        )

    def delete(self, path, params=None, headers=None):
        """Make DELETE request"""
        return requests.delete(
            f"{self.endpoint}{path}",
            params=params,
            headers=self._headers(headers),
            timeout=REQUEST_TIMEOUT_SECONDS,
        )


# ============================================================================
# API Details Fixture
# ============================================================================


@pytest.fixture(scope="session")
def api_details():
    """Get API Gateway details from LocalStack"""
    try:
        apigateway = boto3.client("apigateway", endpoint_url=ENDPOINT_BASE_URL)

        apis = apigateway.get_rest_apis()
        api = next(api for api in apis["items"] if "image-relay" in api["name"])
        api_id = api["id"]

        keys = apigateway.get_api_keys(includeValues=True)
        api_key = keys["items"][0]["value"] if keys["items"] else "test-key"

        endpoint = f"{ENDPOINT_BASE_URL}/restapis/{api_id}/snd/_user_request_"

        return {"api_id": api_id, "api_key": api_key, "endpoint": endpoint, "stage": "snd"}
    except Exception as e:
        logger.warning(f"Could not get API details from LocalStack: {e}")
        pytest.skip(f"Could not get API details from LocalStack: {e}")


@pytest.fixture(scope="session")
def api_headers(api_details):
    """Default HTTP headers for API requests"""
    return {"Content-Type": "application/json", "x-api-key": api_details["api_key"]}


@pytest.fixture
def api_client(api_details, api_headers):
    """HTTP client wrapper for E2E API testing"""
    _client = E2EAPIClient(api_details["endpoint"], api_headers)
    yield _client
    _cleanup_images(_client)


def _cleanup_images(client: E2EAPIClient) -> None:
    """Delete every stored image through the API to prevent test data leakage."""
    response = client.get("/v1/images")
    if not response.ok:
        logger.error("Failed to list images for cleanup: %s", response.text)
        return

    images = response.json().get("images", [])
    for image in images:
        client.delete(f"/v1/images/{image['id']}")

    logger.info("Deleted %d images after test", len(images))


# ============================================================================
# Sample File Data
# ============================================================================

SAMPLE_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


@pytest.fixture
def sample_png_bytes() -> bytes:
    return base64.b64decode(SAMPLE_PNG_BASE64)


@pytest.fixture
def upload_valid_payload() -> dict:
    return {
        "original_name": "sample.png",
        "file": SAMPLE_PNG_BASE64,
    }
