"""Event validation utilities."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from core.models.errors import InvalidEventError

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for logs and results.

    Removes noisy fields like:
    - url
    - ctx
    - input
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "event"
        raw_msg = err.get("msg", "Invalid value")

        msg = raw_msg.replace("Value error,", "").strip()

        msg_lower = msg.lower()
        if "field required" in msg_lower:
            msg = "This field is required"
        elif "too_short" in err.get("type", "") or "at least" in msg_lower:
            msg = "Must not be empty"
        elif "type" in msg_lower:
            msg = "Invalid value type"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def parse_event(model: type[ModelT], data: Any) -> ModelT:
    """Validate an event payload against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Raw event payload

    Returns:
        The validated model

    Raises:
        InvalidEventError: If the payload does not match the model
    """
    if not isinstance(data, dict):
        raise InvalidEventError(
            message="Event payload must be an object",
            details={"type": type(data).__name__},
        )

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise InvalidEventError(
            message="Invalid event payload",
            details={"errors": sanitize_validation_errors(exc.errors())},
        ) from exc
