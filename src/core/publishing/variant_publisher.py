"""Writes rendered versions next to the source's directory."""

from collections.abc import Sequence

from aws_lambda_powertools import Logger

from core.models.image import RenderedVariant, SourceReference
from core.repositories.storage_repository import ObjectStorageRepository
from core.utils.constants import format_file_size
from core.utils.keys import build_destination_key, split_key

logger = Logger(UTC=True)


class VariantPublisher:
    """Uploads renditions to ``<source-dir><suffix>/<source-name>``.

    Uploads run one at a time. A failed upload stops the sequence and the
    error propagates; renditions already written are not removed.
    """

    def __init__(self, storage: ObjectStorageRepository) -> None:
        self.storage = storage

    def publish(
        self,
        *,
        bucket: str,
        key_prefix: str,
        suffix: str,
        base_name: str,
        body: bytes,
        content_type: str,
    ) -> str:
        """Upload one rendition and return its key.

        Raises:
            NotFoundError: If the destination bucket doesn't exist
            AccessError: If the upload fails
        """
        key = build_destination_key(key_prefix, suffix, base_name)

        logger.debug(
            "Publishing version",
            extra={"bucket": bucket, "key": key, "size": format_file_size(len(body))},
        )

        self.storage.put_object(
            bucket=bucket,
            key=key,
            body=body,
            content_type=content_type,
        )
        return key

    def publish_all(
        self,
        *,
        bucket: str,
        source: SourceReference,
        variants: Sequence[RenderedVariant],
    ) -> list[str]:
        """Upload every rendition in order and return the written keys."""
        key_prefix, base_name = split_key(source.key)
        written: list[str] = []

        for variant in variants:
            try:
                key = self.publish(
                    bucket=bucket,
                    key_prefix=key_prefix,
                    suffix=variant.target.suffix,
                    base_name=base_name,
                    body=variant.body,
                    content_type=variant.content_type,
                )
            except Exception:
                logger.warning(
                    "Publishing stopped, earlier versions left in place",
                    extra={"bucket": bucket, "written": written},
                )
                raise

            written.append(key)

        logger.info(
            "All versions published",
            extra={"bucket": bucket, "keys": written},
        )
        return written
