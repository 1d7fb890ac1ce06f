"""
Lambda handler returning the direct storage URL of a file to token holders.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import AccessDeniedError, NotFoundError
from core.utils.constants import ERROR_CODE_TOKEN_REQUIRED
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DirectCdnRequest, DirectCdnResponse
from .service import DirectCdnService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle direct CDN link requests.

    - 401 when no token is supplied
    - 403 when the token does not verify for this image
    - 404 when the token is valid but the record is gone

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    # The query string carries the token; never log it.
    logger.info(
        "Received direct CDN request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    path_params = event.get("pathParameters") or {}
    query_params = event.get("queryStringParameters") or {}

    try:
        request = validate_request(
            DirectCdnRequest,
            {
                "image_id": path_params.get("image_id"),
                "token": query_params.get("token"),
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

    if not request.token:
        return ResponseBuilder.unauthorized(
            "Access token required",
            error=ERROR_CODE_TOKEN_REQUIRED,
        )

    try:
        record = DirectCdnService().resolve(request.image_id, request.token)
    except AccessDeniedError as exc:
        return ResponseBuilder.forbidden(exc.message, error=exc.error_code)
    except NotFoundError:
        return ResponseBuilder.not_found("Image not found")

    response = DirectCdnResponse(
        image_id=record.id,
        original_name=record.original_name,
        direct_cdn_url=record.cdn_url,
    )

    return ResponseBuilder.ok(response.model_dump())
