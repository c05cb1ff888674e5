"""Global constants used throughout the application.

This module centralizes the fixed rendition list, error codes, format tables
and environment variable names so they can be changed in one place.
"""

import os
from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Event / Configuration Errors
ERROR_CODE_INVALID_EVENT = "INVALID_EVENT"
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"
ERROR_CODE_UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

# Storage Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_STORAGE_ACCESS_FAILED = "STORAGE_ACCESS_FAILED"

# Image Processing Errors
ERROR_CODE_DECODE_FAILED = "DECODE_FAILED"
ERROR_CODE_RENDER_FAILED = "RENDER_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"

# boto3 error codes that mean the object (or its bucket) does not exist
NOT_FOUND_ERROR_CODES: Final[frozenset[str]] = frozenset(
    {"NoSuchKey", "NoSuchBucket", "404", "NotFound"}
)


# ============================================================================
# Image Formats
# ============================================================================

# Extension -> (MIME type, Pillow format name)
IMAGE_TYPE_MAP: Final[dict[str, tuple[str, str]]] = {
    "jpg": ("image/jpeg", "JPEG"),
    "png": ("image/png", "PNG"),
}

ALLOWED_IMAGE_TYPES: Final[frozenset[str]] = frozenset(IMAGE_TYPE_MAP.keys())

# Extension -> Pillow formats accepted on decode (multi-picture JPEGs load as MPO)
DECODE_FORMATS: Final[dict[str, frozenset[str]]] = {
    "jpg": frozenset({"JPEG", "MPO"}),
    "png": frozenset({"PNG"}),
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"
JPEG_QUALITY = 90


# ============================================================================
# Renditions
# ============================================================================

# (width, height, destination suffix), processed in this order
VERSIONS: Final[tuple[tuple[int, int, str], ...]] = (
    (1080, 1080, "-1080"),
    (200, 200, "-200"),
    (100, 100, "-100"),
)


# ============================================================================
# Buckets
# ============================================================================

DEFAULT_DESTINATION_BUCKET = "settlin"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_DESTINATION_BUCKET_NAME = "DESTINATION_BUCKET_NAME"
LOCALSTACK_URL = "http://localhost:4566"

# ============================================================================
# Observability
# ============================================================================

METRICS_NAMESPACE = "ImageVersions"
METRIC_VERSIONS_PUBLISHED = "VersionsPublished"
METRIC_VERSIONS_FAILED = "VersionsFailed"

# ============================================================================
# Helper Functions
# ============================================================================


def get_destination_bucket() -> str:
    """Return the bucket renditions are written to."""
    return os.getenv(ENV_DESTINATION_BUCKET_NAME) or DEFAULT_DESTINATION_BUCKET


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted file size string
    """
    size: float = float(size_bytes)

    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0

    return f"{size:.1f} TB"
