"""API error codes and the JSON error envelope."""

from __future__ import annotations

from enum import StrEnum

from fastapi import HTTPException


class ApiErrorCode(StrEnum):
    """Machine-readable API error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REPORT_FILTERS = "INVALID_REPORT_FILTERS"
    INVALID_EXPORT_REQUEST = "INVALID_EXPORT_REQUEST"
    INSPECTIONS_BACKEND_ERROR = "INSPECTIONS_BACKEND_ERROR"
    REQUEST_TOO_LARGE = "REQUEST_TOO_LARGE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


_STATUS_BY_CODE: dict[ApiErrorCode, int] = {
    ApiErrorCode.VALIDATION_ERROR: 422,
    ApiErrorCode.INVALID_REPORT_FILTERS: 422,
    ApiErrorCode.INVALID_EXPORT_REQUEST: 422,
    ApiErrorCode.INSPECTIONS_BACKEND_ERROR: 502,
    ApiErrorCode.REQUEST_TOO_LARGE: 413,
    ApiErrorCode.INTERNAL_SERVER_ERROR: 500,
}


class ApiError(HTTPException):
    """Service-level failure rendered as ``{"error_code", "message"}``.

    The HTTP status follows from the error code unless given explicitly.
    """

    def __init__(
        self,
        error_code: ApiErrorCode,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(status_code=status_code or _STATUS_BY_CODE[error_code], detail=message)
        self.error_code = error_code
        self.message = message

    @classmethod
    def backend_failure(cls, exc: Exception) -> ApiError:
        """Wrap an inspections backend failure as a 502."""
        return cls(ApiErrorCode.INSPECTIONS_BACKEND_ERROR, str(exc))


def error_envelope(error_code: str, message: str) -> dict[str, str]:
    return {"error_code": str(error_code), "message": message}
