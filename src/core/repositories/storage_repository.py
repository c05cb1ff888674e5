"""Abstract contract for object storage."""

from abc import ABC, abstractmethod


class ObjectStorageRepository(ABC):
    """Contract for reading source objects and writing renditions.

    Implementations could be S3, GCS, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def fetch_object(self, *, bucket: str, key: str) -> tuple[bytes, str | None]:
        """Download an object.

        Args:
            bucket: Bucket holding the object
            key: Object key

        Returns:
            Tuple of (content_bytes, content_type); content_type is None
            when the store did not report one

        Raises:
            NotFoundError: If the object or bucket doesn't exist
            AccessError: If the read fails for any other reason
        """

    @abstractmethod
    def put_object(
        self,
        *,
        bucket: str,
        key: str,
        body: bytes,
        content_type: str,
    ) -> None:
        """Store an object, replacing any existing one under the same key.

        Args:
            bucket: Destination bucket
            key: Destination key
            body: Binary content
            content_type: MIME type (e.g., 'image/jpeg')

        Raises:
            NotFoundError: If the bucket doesn't exist
            AccessError: If the write fails for any other reason
        """
