"""Pillow-based rendering of resized image versions."""

from collections.abc import Sequence
from io import BytesIO

from aws_lambda_powertools import Logger
from PIL import Image, UnidentifiedImageError

from core.imaging.sizing import scale_to_fit
from core.models.errors import DecodeError, RenderError
from core.models.image import RenderedVariant, TargetSize
from core.utils.constants import DECODE_FORMATS, IMAGE_TYPE_MAP, JPEG_QUALITY

logger = Logger(UTC=True)

# Modes JPEG cannot store directly
_JPEG_CONVERT_MODES = frozenset({"RGBA", "LA", "P", "PA", "I;16"})


class PillowRenderer:
    """Decodes a source image once and produces one rendition per target.

    Targets are processed in order; the first failure aborts the rest and
    no renditions are returned.
    """

    def __init__(self, resample: Image.Resampling = Image.Resampling.LANCZOS) -> None:
        self._resample = resample

    def decode(self, data: bytes, image_type: str) -> Image.Image:
        """Decode bytes and check they hold an image of ``image_type``.

        Raises:
            DecodeError: If the bytes are not a valid image of that type
        """
        expected_formats = DECODE_FORMATS[image_type]

        try:
            image = Image.open(BytesIO(data))
            image.load()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            ValueError,
        ) as exc:
            logger.error(
                "Image decode failed",
                extra={"image_type": image_type, "size": len(data)},
            )
            raise DecodeError(
                message=f"Unable to decode {image_type} image: {exc}",
                details={"image_type": image_type},
            ) from exc

        if image.format not in expected_formats:
            raise DecodeError(
                message=(
                    f"Image data is {image.format or 'unknown'}, "
                    f"expected {' or '.join(sorted(expected_formats))}"
                ),
                details={"image_type": image_type, "detected": image.format},
            )

        logger.debug(
            "Image decoded",
            extra={"format": image.format, "size": image.size, "mode": image.mode},
        )
        return image

    def render(
        self,
        data: bytes,
        image_type: str,
        targets: Sequence[TargetSize],
        *,
        content_type: str,
    ) -> list[RenderedVariant]:
        """Render every target from a single decoded image.

        Raises:
            DecodeError: If the source cannot be decoded
            RenderError: If any rendition fails
        """
        image = self.decode(data, image_type)
        _, output_format = IMAGE_TYPE_MAP[image_type]

        variants: list[RenderedVariant] = []
        for target in targets:
            variants.append(
                self._render_one(
                    image,
                    target,
                    output_format=output_format,
                    content_type=content_type,
                )
            )

        return variants

    def _render_one(
        self,
        image: Image.Image,
        target: TargetSize,
        *,
        output_format: str,
        content_type: str,
    ) -> RenderedVariant:
        source_width, source_height = image.size

        try:
            width, height = scale_to_fit(
                source_width, source_height, target.width, target.height
            )
            resized = image.resize((width, height), self._resample)

            if output_format == "JPEG" and resized.mode in _JPEG_CONVERT_MODES:
                resized = resized.convert("RGB")

            buffer = BytesIO()
            if output_format == "JPEG":
                resized.save(buffer, format=output_format, quality=JPEG_QUALITY)
            else:
                resized.save(buffer, format=output_format)

        except (OSError, ValueError, MemoryError) as exc:
            logger.error(
                "Render failed",
                extra={"suffix": target.suffix, "box": (target.width, target.height)},
            )
            raise RenderError(
                message=f"Unable to render {target.width}x{target.height} version: {exc}",
                details={"suffix": target.suffix},
            ) from exc

        logger.info(
            "Version rendered",
            extra={
                "suffix": target.suffix,
                "source_size": (source_width, source_height),
                "output_size": (width, height),
            },
        )

        return RenderedVariant(
            target=target,
            body=buffer.getvalue(),
            content_type=content_type,
            width=width,
            height=height,
        )
