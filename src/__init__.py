"""Image Versions Service Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "S3-triggered AWS Lambda that writes resized versions of uploaded images"
)

__all__ = ["handlers", "core"]
