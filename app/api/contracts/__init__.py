"""Public API contracts."""

from app.api.contracts.models import (
    ApiErrorResponse,
    HealthResponse,
    InspectionDtoResponse,
    InspectionFormRequest,
    InspectionSubmitResponse,
    ReportPreviewResponse,
)

__all__ = [
    "ApiErrorResponse",
    "HealthResponse",
    "InspectionDtoResponse",
    "InspectionFormRequest",
    "InspectionSubmitResponse",
    "ReportPreviewResponse",
]
