"""
Pytest configuration and fixtures for image-versions tests.
Provides AWS mocking, S3 bucket fixtures, sample images and S3 events.
"""

import os
from collections.abc import Callable
from io import BytesIO
from types import SimpleNamespace
from typing import Any
from urllib.parse import quote_plus

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "image-versions-test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.pop("AWS_ENDPOINT_URL", None)
os.environ.pop("DESTINATION_BUCKET_NAME", None)

import boto3  # noqa: E402
import pytest  # noqa: E402
from botocore.exceptions import ClientError  # noqa: E402
from moto import mock_aws  # noqa: E402
from PIL import Image  # noqa: E402

SOURCE_BUCKET_NAME = "uploads"
DESTINATION_BUCKET_NAME = "settlin"


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


def _create_bucket(s3_client, bucket_name: str) -> None:
    try:
        s3_client.create_bucket(Bucket=bucket_name)
    except ClientError as e:
        if e.response["Error"]["Code"] != "BucketAlreadyOwnedByYou":
            raise


@pytest.fixture(scope="function")
def source_bucket(s3_client) -> str:
    """Bucket the notifications come from (moto cleans up on context exit)."""
    _create_bucket(s3_client, SOURCE_BUCKET_NAME)
    return SOURCE_BUCKET_NAME


@pytest.fixture(scope="function")
def destination_bucket(s3_client) -> str:
    """Bucket the versions are written to."""
    _create_bucket(s3_client, DESTINATION_BUCKET_NAME)
    return DESTINATION_BUCKET_NAME


@pytest.fixture
def s3_put_object(s3_client) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("uploads", "photos/img.png", image_bytes, "image/png")
    """

    def _put(
        bucket: str,
        key: str,
        body: bytes,
        content_type: str = "application/octet-stream",
    ) -> dict[str, Any]:
        return s3_client.put_object(
            Bucket=bucket, Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str, str], dict[str, Any]]:
    """
    Helper to get an object (body bytes + content type) from S3.

    Usage:
        obj = s3_get_object("settlin", "photos-200/img.png")
    """

    def _get(bucket: str, key: str) -> dict[str, Any]:
        response: dict[str, Any] = s3_client.get_object(Bucket=bucket, Key=key)
        return {
            "body": response["Body"].read(),
            "content_type": response.get("ContentType"),
        }

    return _get


@pytest.fixture
def s3_list_keys(s3_client) -> Callable[[str], list[str]]:
    """Helper to list every key in a bucket."""

    def _list(bucket: str) -> list[str]:
        response = s3_client.list_objects_v2(Bucket=bucket)
        return sorted(obj["Key"] for obj in response.get("Contents", []))

    return _list


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """
    Build an encoded image with Pillow.

    Usage:
        png = make_image("PNG", (400, 300))
    """

    def _make(
        fmt: str = "PNG",
        size: tuple[int, int] = (400, 300),
        mode: str = "RGB",
    ) -> bytes:
        color: Any = (200, 30, 30, 255) if mode == "RGBA" else (200, 30, 30)
        image = Image.new(mode, size, color)
        buffer = BytesIO()
        image.save(buffer, format=fmt)
        return buffer.getvalue()

    return _make


@pytest.fixture
def sample_png(make_image) -> bytes:
    return make_image("PNG", (400, 300))


@pytest.fixture
def sample_jpeg(make_image) -> bytes:
    return make_image("JPEG", (2000, 1000))


@pytest.fixture
def s3_event() -> Callable[..., dict[str, Any]]:
    """
    Build an S3 object-created notification with a URL-encoded key.

    Usage:
        event = s3_event("uploads", "photos/my image.png")
    """

    def _event(bucket: str, key: str, *, encode: bool = True) -> dict[str, Any]:
        return {
            "Records": [
                {
                    "eventSource": "aws:s3",
                    "eventName": "ObjectCreated:Put",
                    "s3": {
                        "bucket": {"name": bucket},
                        "object": {"key": quote_plus(key, safe="/") if encode else key},
                    },
                }
            ]
        }

    return _event


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )
