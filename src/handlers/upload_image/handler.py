"""
Lambda handler responsible for file upload and record creation.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import (
    BlobStorageError,
    StoreUnavailableError,
    ValidationError,
)
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import ImageUploadRequest, ImageUploadResponse
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle file upload requests.

    The handler decodes base64-encoded file data, validates the incoming
    payload, relays the file to blob storage and returns the id and CDN
    path of the new record.

    Expected API Gateway event structure:
    {
        "body": "{\"file\": \"<base64>\", \"original_name\": \"a.png\"}",
        "isBase64Encoded": false
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received file upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    if not isinstance(body, dict):
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    try:
        request = validate_request(ImageUploadRequest, body)
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": sanitize_validation_errors(exc.errors())},
        )
        return ResponseBuilder.validation_error(
            message="Invalid request payload",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    try:
        file_data = UploadService.decode_file(request.file)
        service = UploadService()

        record_id = service.upload_file(
            original_name=request.original_name,
            file_data=file_data,
        )

    except ValidationError as exc:
        logger.warning(
            "Validation error during file upload",
            extra={"error_code": exc.error_code},
        )
        return ResponseBuilder.validation_error(
            message=exc.message,
            error=exc.error_code,
        )

    except BlobStorageError as exc:
        logger.exception("Blob storage error during file upload")
        return ResponseBuilder.bad_gateway(exc.message, error=exc.error_code)

    except StoreUnavailableError as exc:
        logger.exception("Metadata store error during file upload")
        return ResponseBuilder.service_unavailable(exc.message, error=exc.error_code)

    response = ImageUploadResponse(
        message="Image uploaded successfully",
        image_id=record_id,
        cdn_url=f"/cdn/{record_id}",
    )

    return ResponseBuilder.created(response.model_dump())
