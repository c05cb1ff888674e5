"""Helpers for S3 object keys.

Keys arrive URL-encoded in notifications, carry the image type in their
extension, and determine where each rendition is written.
"""

import posixpath
import re
from urllib.parse import unquote_plus

from core.models.errors import UnsupportedFormatError
from core.utils.constants import ALLOWED_IMAGE_TYPES

_EXTENSION_PATTERN = re.compile(r"\.([^.]*)$")


def decode_object_key(raw_key: str) -> str:
    """Decode a notification key (``+`` is a space, the rest is percent-encoded)."""
    return unquote_plus(raw_key)


def infer_image_type(key: str) -> str:
    """Return the image type named by the key extension.

    Raises:
        UnsupportedFormatError: If the key has no extension or it is not allowed
    """
    match = _EXTENSION_PATTERN.search(key)
    if not match:
        raise UnsupportedFormatError(
            message="Could not determine the image type",
            details={"key": key},
        )

    image_type = match.group(1)
    if image_type not in ALLOWED_IMAGE_TYPES:
        raise UnsupportedFormatError(
            message=f"Unsupported image type: {image_type}",
            details={
                "key": key,
                "image_type": image_type,
                "allowed": sorted(ALLOWED_IMAGE_TYPES),
            },
        )

    return image_type


def split_key(key: str) -> tuple[str, str]:
    """Split a key into its directory portion and base name.

    A key without a directory yields ``"."`` as its directory.
    """
    return posixpath.dirname(key) or ".", posixpath.basename(key)


def build_destination_key(key_prefix: str, suffix: str, base_name: str) -> str:
    """Place a rendition in the sibling directory ``<key_prefix><suffix>``."""
    return f"{key_prefix}{suffix}/{base_name}"

