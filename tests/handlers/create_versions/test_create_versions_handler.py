from io import BytesIO
from unittest.mock import patch

import pytest
from PIL import Image

from core.models.errors import ConfigurationError
from handlers.create_versions.handler import handler


def image_size(body: bytes) -> tuple[int, int]:
    with Image.open(BytesIO(body)) as image:
        return image.size


class TestCreateVersionsHandler:
    def test_jpeg_versions_written(
        self,
        lambda_context,
        source_bucket,
        destination_bucket,
        s3_put_object,
        s3_get_object,
        s3_list_keys,
        s3_event,
        sample_jpeg,
    ) -> None:
        s3_put_object(source_bucket, "photos/img.jpg", sample_jpeg, "image/jpeg")

        result = handler(s3_event(source_bucket, "photos/img.jpg"), lambda_context)

        assert result["status"] == "success"
        assert result["request_id"] == "test-request-id"
        assert result["source"] == "uploads/photos/img.jpg"
        assert result["destination_bucket"] == "settlin"
        assert result["keys"] == [
            "photos-1080/img.jpg",
            "photos-200/img.jpg",
            "photos-100/img.jpg",
        ]
        assert s3_list_keys(destination_bucket) == sorted(result["keys"])

        expected_sizes = {
            "photos-1080/img.jpg": (1080, 540),
            "photos-200/img.jpg": (200, 100),
            "photos-100/img.jpg": (100, 50),
        }
        for key, size in expected_sizes.items():
            obj = s3_get_object(destination_bucket, key)
            assert obj["content_type"] == "image/jpeg"
            assert image_size(obj["body"]) == size

    def test_key_without_directory(
        self,
        lambda_context,
        source_bucket,
        destination_bucket,
        s3_put_object,
        s3_list_keys,
        s3_event,
        sample_png,
    ) -> None:
        s3_put_object(source_bucket, "img.png", sample_png, "image/png")

        result = handler(s3_event(source_bucket, "img.png"), lambda_context)

        assert result["status"] == "success"
        assert s3_list_keys(destination_bucket) == [
            ".-100/img.png",
            ".-1080/img.png",
            ".-200/img.png",
        ]

    def test_encoded_key_with_spaces_and_unicode(
        self,
        lambda_context,
        source_bucket,
        destination_bucket,
        s3_put_object,
        s3_list_keys,
        s3_event,
        sample_png,
    ) -> None:
        key = "holiday pics/plage été.png"
        s3_put_object(source_bucket, key, sample_png, "image/png")

        result = handler(s3_event(source_bucket, key), lambda_context)

        assert result["status"] == "success"
        assert result["source"] == f"uploads/{key}"
        assert "holiday pics-200/plage été.png" in s3_list_keys(destination_bucket)

    def test_destination_bucket_override(
        self,
        monkeypatch,
        lambda_context,
        s3_client,
        source_bucket,
        s3_put_object,
        s3_list_keys,
        s3_event,
        sample_png,
    ) -> None:
        monkeypatch.setenv("DESTINATION_BUCKET_NAME", "versions")
        s3_client.create_bucket(Bucket="versions")
        s3_put_object(source_bucket, "a/b.png", sample_png, "image/png")

        result = handler(s3_event(source_bucket, "a/b.png"), lambda_context)

        assert result["destination_bucket"] == "versions"
        assert len(s3_list_keys("versions")) == 3

    def test_same_bucket_rejected(
        self, lambda_context, destination_bucket, s3_put_object, s3_list_keys, s3_event, sample_png
    ) -> None:
        s3_put_object(destination_bucket, "photos/img.png", sample_png, "image/png")

        result = handler(s3_event(destination_bucket, "photos/img.png"), lambda_context)

        assert result["status"] == "failed"
        assert result["error"] == "CONFIGURATION_ERROR"
        assert result["details"]["failed_state"] == "validating"
        assert s3_list_keys(destination_bucket) == ["photos/img.png"]

    @pytest.mark.parametrize("key", ["file.gif", "noextension", "photo.JPG"])
    def test_unsupported_type(
        self, lambda_context, source_bucket, destination_bucket, s3_list_keys, s3_event, key
    ) -> None:
        result = handler(s3_event(source_bucket, key), lambda_context)

        assert result["status"] == "failed"
        assert result["error"] == "UNSUPPORTED_FORMAT"
        assert s3_list_keys(destination_bucket) == []

    def test_missing_source_object(
        self, lambda_context, source_bucket, destination_bucket, s3_list_keys, s3_event
    ) -> None:
        result = handler(s3_event(source_bucket, "photos/gone.png"), lambda_context)

        assert result["status"] == "failed"
        assert result["error"] == "NOT_FOUND"
        assert result["details"]["failed_state"] == "fetching"
        assert result["message"].startswith(
            "Unable to resize uploads/photos/gone.png and upload to settlin/photos/gone.png"
        )
        assert s3_list_keys(destination_bucket) == []

    def test_corrupt_image(
        self,
        lambda_context,
        source_bucket,
        destination_bucket,
        s3_put_object,
        s3_list_keys,
        s3_event,
    ) -> None:
        s3_put_object(source_bucket, "photos/bad.png", b"\x89PNG\r\n\x1a\ntruncated", "image/png")

        result = handler(s3_event(source_bucket, "photos/bad.png"), lambda_context)

        assert result["status"] == "failed"
        assert result["error"] == "DECODE_FAILED"
        assert result["details"]["failed_state"] == "rendering"
        assert s3_list_keys(destination_bucket) == []

    def test_missing_destination_bucket(
        self, lambda_context, source_bucket, s3_put_object, s3_event, sample_png
    ) -> None:
        s3_put_object(source_bucket, "photos/img.png", sample_png, "image/png")

        result = handler(s3_event(source_bucket, "photos/img.png"), lambda_context)

        assert result["status"] == "failed"
        assert result["error"] == "NOT_FOUND"
        assert result["details"]["failed_state"] == "publishing"

    def test_malformed_event(self, lambda_context) -> None:
        result = handler({"Records": [{"s3": {}}]}, lambda_context)

        assert result["status"] == "failed"
        assert result["error"] == "INVALID_EVENT"
        assert result["details"]["source_bucket"] is None

    def test_escaped_service_error_becomes_failure(self, lambda_context, s3_event) -> None:
        with patch(
            "handlers.create_versions.handler.CreateVersionsService.process",
            side_effect=ConfigurationError(message="Destination bucket not configured"),
        ):
            result = handler(s3_event("uploads", "a.png"), lambda_context)

        assert result["status"] == "failed"
        assert result["error"] == "CONFIGURATION_ERROR"
        assert result["message"] == "Destination bucket not configured"
