"""
Lambda handler that creates resized versions of newly uploaded images.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.utils.constants import (
    METRIC_VERSIONS_FAILED,
    METRIC_VERSIONS_PUBLISHED,
    METRICS_NAMESPACE,
)
from core.utils.decorators import event_handler
from core.utils.response import ResultBuilder

from .service import CreateVersionsService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@event_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle an S3 object-created notification.

    Expected event structure:
    {
        "Records": [
            {"s3": {"bucket": {"name": "..."}, "object": {"key": "..."}}}
        ]
    }

    Args:
        event: S3 notification event
        context: AWS Lambda execution context

    Returns:
        Invocation result: a success payload listing the written keys, or a
        failure payload with a descriptive error message
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Reading options from event",
        extra={
            "event": event,
            "request_id": request_id,
            "function_name": getattr(context, "function_name", None),
        },
    )

    service = CreateVersionsService()
    result = service.process(event)

    if not result.success:
        metrics.add_metric(name=METRIC_VERSIONS_FAILED, unit=MetricUnit.Count, value=1)
        return ResultBuilder.failure(
            result.message,
            error=result.error_code,
            details={
                "failed_state": result.failed_state,
                "source_bucket": result.source_bucket,
                "source_key": result.source_key,
                "destination_bucket": result.destination_bucket,
                **result.details,
            },
            request_id=request_id,
        )

    metrics.add_metric(
        name=METRIC_VERSIONS_PUBLISHED,
        unit=MetricUnit.Count,
        value=len(result.keys),
    )
    return ResultBuilder.success(
        result.message,
        body={
            "source": f"{result.source_bucket}/{result.source_key}",
            "destination_bucket": result.destination_bucket,
            "keys": result.keys,
        },
        request_id=request_id,
    )
