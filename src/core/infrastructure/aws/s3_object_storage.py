"""S3-backed implementation of ObjectStorageRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import AccessError, NotFoundError
from core.repositories.storage_repository import ObjectStorageRepository
from core.utils.constants import NOT_FOUND_ERROR_CODES

logger = Logger(UTC=True)


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3ObjectStorage(ObjectStorageRepository):
    """Object storage backed by Amazon S3.

    All boto3 errors are caught and translated into
    NotFoundError / AccessError. Nothing is retried here.
    """

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def fetch_object(self, *, bucket: str, key: str) -> tuple[bytes, str | None]:
        """Download object bytes and the stored content type."""
        logger.debug("Downloading object", extra={"bucket": bucket, "key": key})

        try:
            response = self._s3.get_object(bucket=bucket, key=key)
            body: bytes = response["Body"].read()
            content_type = response.get("ContentType")

            logger.info(
                "Object downloaded successfully",
                extra={"bucket": bucket, "key": key, "size": len(body)},
            )

            return body, content_type

        except ClientError as exc:
            code = _error_code(exc)
            logger.error(
                "S3 download failed",
                extra={"bucket": bucket, "key": key, "code": code},
            )

            if code in NOT_FOUND_ERROR_CODES:
                raise NotFoundError(
                    message=f"Object not found: {bucket}/{key}",
                    details={"bucket": bucket, "key": key, "code": code},
                ) from exc

            raise AccessError(
                message=f"Unable to read {bucket}/{key}: {code or exc}",
                details={"bucket": bucket, "key": key, "code": code},
            ) from exc

        except BotoCoreError as exc:
            logger.exception("Unexpected error downloading object")
            raise AccessError(
                message=f"Unable to read {bucket}/{key}: {exc}",
                details={"bucket": bucket, "key": key},
            ) from exc

    def put_object(
        self,
        *,
        bucket: str,
        key: str,
        body: bytes,
        content_type: str,
    ) -> None:
        """Upload object bytes to S3."""
        logger.debug(
            "Uploading object",
            extra={
                "bucket": bucket,
                "key": key,
                "size": len(body),
                "content_type": content_type,
            },
        )

        try:
            self._s3.put_object(
                bucket=bucket,
                key=key,
                body=body,
                content_type=content_type,
            )
            logger.info("Object uploaded successfully", extra={"bucket": bucket, "key": key})

        except ClientError as exc:
            code = _error_code(exc)
            logger.error(
                "S3 upload failed",
                extra={"bucket": bucket, "key": key, "code": code},
            )

            if code in NOT_FOUND_ERROR_CODES:
                raise NotFoundError(
                    message=f"Destination bucket not found: {bucket}",
                    details={"bucket": bucket, "key": key, "code": code},
                ) from exc

            raise AccessError(
                message=f"Unable to write {bucket}/{key}: {code or exc}",
                details={"bucket": bucket, "key": key, "code": code},
            ) from exc

        except BotoCoreError as exc:
            logger.exception("Unexpected error uploading object")
            raise AccessError(
                message=f"Unable to write {bucket}/{key}: {exc}",
                details={"bucket": bucket, "key": key},
            ) from exc
