"""Pydantic models for the S3 notification and the invocation result."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class S3Bucket(BaseModel):
    name: StrictStr = Field(..., min_length=1, description="Bucket name")


class S3Object(BaseModel):
    key: StrictStr = Field(..., min_length=1, description="URL-encoded object key")


class S3Entity(BaseModel):
    bucket: S3Bucket
    s3_object: S3Object = Field(..., alias="object")


class S3EventRecord(BaseModel):
    """A single S3 notification record (only the fields we read)."""

    s3: S3Entity


class S3NotificationEvent(BaseModel):
    """Validation model for the triggering notification."""

    records: list[S3EventRecord] = Field(..., alias="Records", min_length=1)

    @property
    def first_record(self) -> S3EventRecord:
        return self.records[0]


class PipelineState(str, Enum):
    """Stages of one invocation. FAILED can be entered from any stage."""

    VALIDATING = "validating"
    FETCHING = "fetching"
    RENDERING = "rendering"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


class ProcessingResult(BaseModel):
    """Outcome of one invocation."""

    model_config = ConfigDict(use_enum_values=True)

    success: bool = Field(..., description="True when every version was written")
    state: PipelineState = Field(..., description="State the pipeline ended in")
    failed_state: PipelineState | None = Field(
        None, description="State the pipeline was in when it failed"
    )
    message: str = Field(..., description="Human-readable outcome")
    source_bucket: str | None = None
    source_key: str | None = None
    destination_bucket: str
    keys: list[str] = Field(default_factory=list, description="Keys written")
    error_code: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)
