"""
Custom exception hierarchy for the wellness dashboard.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class WellnessException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidInputError(WellnessException):
    """A malformed activity record or reference instant reached the core."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_INPUT"

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
            details["value"] = repr(value)
        super().__init__(message=message, details=details)


class ActivityStoreError(WellnessException):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "ACTIVITY_STORE_ERROR"

    def __init__(self, operation: str, user_id: str):
        super().__init__(
            message=f"Activity store failed during {operation} for user {user_id}.",
            details={"operation": operation, "user_id": user_id},
        )


class UnknownTimezoneError(WellnessException):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "UNKNOWN_TIMEZONE"

    def __init__(self, name: str):
        super().__init__(
            message=f"Timezone {name!r} is not a known IANA zone.",
            details={"timezone": name},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def wellness_exception_handler(request: Request, exc: WellnessException) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
