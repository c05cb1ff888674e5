"""Business logic for creating resized image versions.

This module validates the triggering notification, then fetches the source
image, renders every configured size and publishes the results, one step at
a time. Any failure ends the invocation; nothing is retried.
"""

from collections.abc import Sequence
from typing import Any

from aws_lambda_powertools import Logger

from core.imaging.renderer import PillowRenderer
from core.infrastructure.aws.s3_object_storage import S3ObjectStorage
from core.models.errors import ConfigurationError, ImageServiceError
from core.models.image import TARGET_SIZES, RenderedVariant, SourceReference, TargetSize
from core.publishing.variant_publisher import VariantPublisher
from core.repositories.storage_repository import ObjectStorageRepository
from core.utils.constants import ERROR_CODE_INTERNAL_ERROR, get_destination_bucket
from core.utils.keys import decode_object_key, infer_image_type
from core.utils.mime import resolve_content_type
from core.utils.validators import parse_event

from .models import PipelineState, ProcessingResult, S3NotificationEvent

logger = Logger(UTC=True)


class CreateVersionsService:
    """Application service responsible for image versions.

    This service orchestrates:
    - Event validation
    - Fetching the source object
    - Rendering one version per target size
    - Publishing versions to the destination bucket
    """

    def __init__(
        self,
        *,
        storage: ObjectStorageRepository | None = None,
        renderer: PillowRenderer | None = None,
        destination_bucket: str | None = None,
        targets: Sequence[TargetSize] = TARGET_SIZES,
    ) -> None:
        """Initialize the service with its infrastructure dependencies."""
        self.storage = storage or S3ObjectStorage()
        self.renderer = renderer or PillowRenderer()
        self.publisher = VariantPublisher(self.storage)
        self.destination_bucket = destination_bucket or get_destination_bucket()
        self.targets = tuple(targets)
        self.state = PipelineState.VALIDATING

    def _enter(self, state: PipelineState) -> None:
        logger.debug(
            "Pipeline state change",
            extra={"from": self.state.value, "to": state.value},
        )
        self.state = state

    def validate(self, event: dict[str, Any]) -> SourceReference:
        """Turn the notification into a source reference.

        Raises:
            InvalidEventError: If the payload is malformed
            ConfigurationError: If source and destination buckets match
            UnsupportedFormatError: If the key's extension is missing or not allowed
        """
        notification = parse_event(S3NotificationEvent, event)

        if len(notification.records) > 1:
            logger.warning(
                "Notification has multiple records, only the first is processed",
                extra={"record_count": len(notification.records)},
            )

        record = notification.first_record
        bucket = record.s3.bucket.name
        key = decode_object_key(record.s3.s3_object.key)

        if bucket == self.destination_bucket:
            raise ConfigurationError(
                message="Source and destination buckets are the same",
                details={"bucket": bucket, "key": key},
            )

        image_type = infer_image_type(key)

        return SourceReference(bucket=bucket, key=key, image_type=image_type)

    def fetch(self, source: SourceReference) -> tuple[bytes, str]:
        """Download the source object and resolve its content type."""
        data, reported_type = self.storage.fetch_object(
            bucket=source.bucket,
            key=source.key,
        )
        content_type = resolve_content_type(
            reported_type,
            file_data=data,
            image_type=source.image_type,
        )
        return data, content_type

    def render(
        self,
        source: SourceReference,
        data: bytes,
        content_type: str,
    ) -> list[RenderedVariant]:
        """Render one version per target size, in order."""
        return self.renderer.render(
            data,
            source.image_type,
            self.targets,
            content_type=content_type,
        )

    def publish(
        self,
        source: SourceReference,
        variants: Sequence[RenderedVariant],
    ) -> list[str]:
        """Write every version to the destination bucket, in order."""
        return self.publisher.publish_all(
            bucket=self.destination_bucket,
            source=source,
            variants=variants,
        )

    def process(self, event: dict[str, Any]) -> ProcessingResult:
        """Run the whole pipeline for one notification.

        The flow is:
        1. Validate the event (before any I/O)
        2. Fetch the source object
        3. Render every target size
        4. Publish every version

        Returns:
            A result describing success, or the state and error it failed with
        """
        self.state = PipelineState.VALIDATING
        source: SourceReference | None = None

        try:
            source = self.validate(event)

            self._enter(PipelineState.FETCHING)
            data, content_type = self.fetch(source)

            self._enter(PipelineState.RENDERING)
            variants = self.render(source, data, content_type)

            self._enter(PipelineState.PUBLISHING)
            keys = self.publish(source, variants)

        except ImageServiceError as exc:
            return self._fail(
                source,
                event,
                error=exc.message,
                error_code=exc.error_code,
                details=exc.details,
            )

        except Exception as exc:
            logger.exception("Unexpected error creating versions")
            return self._fail(
                source,
                event,
                error=str(exc) or type(exc).__name__,
                error_code=ERROR_CODE_INTERNAL_ERROR,
                details={"error_type": type(exc).__name__},
            )

        self._enter(PipelineState.DONE)

        message = (
            f"Successfully resized {source.bucket}/{source.key} "
            f"and uploaded to {self.destination_bucket}/{source.key}"
        )
        logger.info(
            message,
            extra={
                "source_bucket": source.bucket,
                "source_key": source.key,
                "destination_bucket": self.destination_bucket,
                "keys": keys,
            },
        )

        return ProcessingResult(
            success=True,
            state=PipelineState.DONE,
            message=message,
            source_bucket=source.bucket,
            source_key=source.key,
            destination_bucket=self.destination_bucket,
            keys=keys,
        )

    def _fail(
        self,
        source: SourceReference | None,
        event: Any,
        *,
        error: str,
        error_code: str,
        details: dict[str, Any],
    ) -> ProcessingResult:
        failed_state = self.state
        self._enter(PipelineState.FAILED)

        if source is not None:
            bucket, key = source.bucket, source.key
        else:
            bucket, key = _raw_location(event)

        message = (
            f"Unable to resize {bucket}/{key} "
            f"and upload to {self.destination_bucket}/{key} "
            f"due to an error: {error}"
        )
        logger.error(
            message,
            extra={
                "source_bucket": bucket,
                "source_key": key,
                "destination_bucket": self.destination_bucket,
                "failed_state": failed_state.value,
                "error_code": error_code,
            },
        )

        return ProcessingResult(
            success=False,
            state=PipelineState.FAILED,
            failed_state=failed_state,
            message=message,
            source_bucket=bucket,
            source_key=key,
            destination_bucket=self.destination_bucket,
            error_code=error_code,
            details=details,
        )


def _raw_location(event: Any) -> tuple[str | None, str | None]:
    """Best-effort bucket/key from an event that failed validation."""
    try:
        s3 = event["Records"][0]["s3"]
        return s3["bucket"]["name"], decode_object_key(s3["object"]["key"])
    except (KeyError, IndexError, TypeError, AttributeError):
        return None, None
