"""
Lambda handler responsible for listing stored images.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .models import ListImagesResponse
from .service import ListService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list images.

    Only sanitized records are returned; storage locators never leave
    this endpoint. Store failures propagate to the decorator (503).

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received image list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    images = ListService().list_images()

    response = ListImagesResponse(images=images, total_count=len(images))

    return ResponseBuilder.ok(response.model_dump())
