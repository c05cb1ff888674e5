from collections.abc import Mapping

from core.utils.constants import DEFAULT_CONTENT_TYPE, IMAGE_TYPE_MAP

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
}


def detect_mime_type(file_data: bytes) -> str:
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    raise ValueError("Unsupported or unknown file type")


def mime_type_for(image_type: str) -> str:
    mime, _ = IMAGE_TYPE_MAP[image_type]
    return mime


def resolve_content_type(
    reported: str | None,
    *,
    file_data: bytes,
    image_type: str,
) -> str:
    """Prefer the stored content type, then the sniffed one, then the extension."""
    if reported and reported != DEFAULT_CONTENT_TYPE:
        return reported

    try:
        return detect_mime_type(file_data)
    except ValueError:
        return mime_type_for(image_type)
