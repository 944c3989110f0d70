"""Standardized response infrastructure for API endpoints.

Admin operations answer with their own payload on success and with a tagged
error body on failure:

    {"success": false, "error": {"kind": "...", "message": "..."}, ...}
"""

from datetime import UTC, datetime
from typing import Any

from fastapi.responses import JSONResponse

from errors import (
    AdminError,
    InternalError,
    InvalidArgument,
    PermissionDenied,
    Unauthenticated,
)


def error_dict(
    error: AdminError,
    error_details: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build a standardized error response dictionary."""
    return {
        "success": False,
        "error": error.to_dict(),
        "timestamp": datetime.now(UTC).isoformat(),
        "request_id": request_id,
        "error_details": error_details,
    }


def error_response(
    error: AdminError,
    error_details: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> JSONResponse:
    """Create a JSONResponse with error format."""
    return JSONResponse(
        content=error_dict(error, error_details, request_id=request_id),
        status_code=error.status_code,
    )


def validation_error_response(
    field_name: str,
    errors: list[Any],
    request_id: str | None = None,
) -> JSONResponse:
    """Create an invalid-argument response for a malformed payload."""
    return error_response(
        InvalidArgument(f"Validation failed for field '{field_name}'"),
        error_details={"validation_errors": errors},
        request_id=request_id,
    )


def http_error_response(
    status_code: int, detail: str, request_id: str | None = None
) -> JSONResponse:
    """Create an error response for a framework-level HTTP exception."""
    if status_code == 401:
        error: AdminError = Unauthenticated(detail)
    elif status_code == 403:
        error = PermissionDenied(detail)
    elif status_code < 500:
        error = InvalidArgument(detail)
    else:
        error = InternalError(detail)

    return JSONResponse(
        content=error_dict(error, request_id=request_id),
        status_code=status_code,
    )


def internal_error_response(
    exc: Exception, request_id: str | None = None
) -> JSONResponse:
    """Create an internal error response for an unhandled exception."""
    return error_response(
        InternalError("An unexpected error occurred"),
        error_details={"exception_type": type(exc).__name__},
        request_id=request_id,
    )
