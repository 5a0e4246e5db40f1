"""Pydantic API models used in OpenAPI contracts."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ApiErrorResponse(BaseModel):
    """Stable error envelope for API responses."""

    error_code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """Health check response payload."""

    status: Literal["ok"]


class InspectionFormRequest(BaseModel):
    """Raw inspection form values as submitted by the operator UI.

    The form is loosely typed on purpose; every field is carried through to the
    DTO composer untouched.
    """

    model_config = ConfigDict(extra="allow")

    inspectionDate: Any = None
    procedureNumber: Any = None
    userIds: Any = None
    applicantType: Any = None
    district: Any = None
    exactAddress: Any = None
    dependency: Any = None

    def form_values(self) -> dict[str, Any]:
        """Return declared and extra fields as a plain mapping."""
        return self.model_dump()


class InspectionDtoResponse(BaseModel):
    """Composed inspection DTO."""

    dto: dict[str, Any] = Field(default_factory=dict)


class InspectionSubmitResponse(BaseModel):
    """Composed DTO plus the backend creation response."""

    dto: dict[str, Any] = Field(default_factory=dict)
    result: dict[str, Any] = Field(default_factory=dict)


class ReportPreviewResponse(BaseModel):
    """Report preview forwarded from the inspections backend."""

    params: dict[str, str] = Field(default_factory=dict)
    preview: dict[str, Any] = Field(default_factory=dict)
