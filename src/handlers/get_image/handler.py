"""
Lambda handler serving stored files with long-lived cache headers.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import BlobStorageError, NotFoundError
from core.models.record import ImageRecord
from core.utils.constants import CDN_CACHE_MAX_AGE_SECONDS, CDN_DEFAULT_SIZE
from core.utils.decorators import api_gateway_handler
from core.utils.request import get_header
from core.utils.response import ResponseBuilder
from core.utils.time import http_date_in, to_http_date
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import GetImageRequest
from .service import GetService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


def build_etag(image_id: str, size: str | None) -> str:
    return f'"{image_id}-{size or CDN_DEFAULT_SIZE}"'


def build_cache_headers(record: ImageRecord, etag: str) -> dict[str, str]:
    headers = {
        "Cache-Control": f"public, max-age={CDN_CACHE_MAX_AGE_SECONDS}",
        "ETag": etag,
        "Expires": http_date_in(CDN_CACHE_MAX_AGE_SECONDS),
        "Vary": "Accept-Encoding",
    }

    try:
        headers["Last-Modified"] = to_http_date(record.created_at)
    except ValueError:
        # Older records may carry no creation date or a free-form one
        logger.warning("Record creation date is not ISO-8601", extra={"image_id": record.id})

    return headers


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle CDN file requests.

    - 404 when no record has the id
    - 304 when If-None-Match equals the ETag (the blob is not fetched)
    - otherwise the file bytes with cache headers

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    logger.info(
        "Received CDN image request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    path_params = event.get("pathParameters") or {}
    query_params = event.get("queryStringParameters") or {}

    try:
        request = validate_request(
            GetImageRequest,
            {
                "image_id": path_params.get("image_id"),
                "size": query_params.get("size"),
            },
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": sanitize_validation_errors(exc.errors())},
        )
        return ResponseBuilder.bad_request(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    service = GetService()

    try:
        record = service.get_record(request.image_id)
    except NotFoundError:
        return ResponseBuilder.not_found("Image not found")

    etag = build_etag(record.id, request.size)
    cache_headers = build_cache_headers(record, etag)

    if get_header(event, "If-None-Match") == etag:
        logger.debug("Client copy is current", extra={"image_id": record.id})
        return ResponseBuilder.not_modified(headers=cache_headers)

    try:
        content, content_type = service.fetch_content(record)
    except NotFoundError:
        logger.exception("Image file missing from storage", extra={"image_id": record.id})
        return ResponseBuilder.not_found("Image not found")
    except BlobStorageError as exc:
        logger.exception("CDN fetch failed", extra={"image_id": record.id})
        return ResponseBuilder.bad_gateway(exc.message, error=exc.error_code)

    return ResponseBuilder.binary_response(
        content,
        content_type=content_type,
        headers=cache_headers,
    )
