"""Shared image models for the versions pipeline."""

from pydantic import BaseModel, ConfigDict, Field, StrictBytes, StrictInt, StrictStr

from core.utils.constants import VERSIONS


class SourceReference(BaseModel):
    """The object named by the triggering notification."""

    model_config = ConfigDict(frozen=True)

    bucket: StrictStr = Field(..., min_length=1, description="Source bucket name")
    key: StrictStr = Field(..., min_length=1, description="Decoded object key")
    image_type: StrictStr = Field(..., description="Extension inferred from the key")


class TargetSize(BaseModel):
    """A bounding box and the suffix its rendition is stored under."""

    model_config = ConfigDict(frozen=True)

    width: StrictInt = Field(..., gt=0, description="Bounding box width in pixels")
    height: StrictInt = Field(..., gt=0, description="Bounding box height in pixels")
    suffix: StrictStr = Field(..., min_length=1, description="Destination directory suffix")


class RenderedVariant(BaseModel):
    """One resized rendition, held in memory for a single invocation."""

    target: TargetSize
    body: StrictBytes = Field(..., description="Encoded image bytes")
    content_type: StrictStr = Field(..., description="MIME type of the encoded image")
    width: StrictInt = Field(..., description="Rendered width in pixels")
    height: StrictInt = Field(..., description="Rendered height in pixels")


TARGET_SIZES: tuple[TargetSize, ...] = tuple(
    TargetSize(width=width, height=height, suffix=suffix)
    for width, height, suffix in VERSIONS
)
