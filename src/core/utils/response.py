"""
Centralized invocation result builder for the S3-triggered Lambda.
"""

from __future__ import annotations

from typing import Any

from core.utils.constants import ERROR_CODE_INTERNAL_ERROR
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


class ResultBuilder:
    """Factory for Lambda invocation results."""

    @staticmethod
    def _result(
        *,
        status: str,
        body: JsonDict | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {"status": status}

        if body:
            payload.update(body)

        if request_id:
            payload["request_id"] = request_id

        payload["timestamp"] = utc_now_iso()

        return payload

    @staticmethod
    def success(
        message: str,
        *,
        body: JsonDict | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        return ResultBuilder._result(
            status=STATUS_SUCCESS,
            body={"message": message, **(body or {})},
            request_id=request_id,
        )

    @staticmethod
    def failure(
        message: str,
        *,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": error or ERROR_CODE_INTERNAL_ERROR,
            "message": message,
        }

        if details:
            payload["details"] = details

        return ResultBuilder._result(
            status=STATUS_FAILED,
            body=payload,
            request_id=request_id,
        )

    @staticmethod
    def internal_error(
        message: str = "Internal error",
        *,
        request_id: str | None = None,
    ) -> JsonDict:
        return ResultBuilder.failure(
            message,
            error=ERROR_CODE_INTERNAL_ERROR,
            request_id=request_id,
        )
